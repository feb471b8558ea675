"""
Binance Rate Limit 관리 및 에러 타입

응답 헤더에서 Rate Limit 정보를 추적하고,
임계값 초과 시 경고 또는 요청 제한.

에러 구분:
- RateLimitError, BinanceApiError: 전송/원격 실패 (Transport 계층)
- StakingDecodeError: 응답은 받았으나 파싱 실패 (Decoder 계층)
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from core.constants import RateLimitThresholds

# 임계값 단계 (WARN, SLOW, STOP 튜플 인덱스)
_WARN, _SLOW, _STOP = 0, 1, 2


class RateLimitError(Exception):
    """Rate Limit 초과 에러
    
    429 응답 수신 시 발생.
    retry_after 초 후 재시도 필요.
    """
    
    def __init__(self, retry_after: int, message: str = "Rate limit exceeded"):
        self.retry_after = retry_after
        self.message = message
        super().__init__(f"{message}. Retry after {retry_after} seconds.")


class BinanceApiError(Exception):
    """Binance API 에러
    
    API 응답에서 에러 코드를 받았을 때 발생.
    """
    
    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(f"Binance API Error [{code}]: {message}")


class StakingDecodeError(Exception):
    """응답 디코딩 에러
    
    전송은 성공했으나 응답 본문이 기대한 형태와 다를 때 발생.
    BinanceApiError와 상속 관계가 없으므로 호출자가 두 실패를 구분 가능.
    
    Attributes:
        path: 요청 API 경로
        message: 실패 사유
        payload: 원본 응답 바이트
    """
    
    def __init__(self, path: str, message: str, payload: bytes = b""):
        self.path = path
        self.message = message
        self.payload = payload
        super().__init__(f"Failed to decode response from {path}: {message}")


@dataclass
class RateLimitTracker:
    """Rate Limit 추적기
    
    SAPI 응답 헤더에서 가중치 사용량을 추출하여 추적.
    IP/UID/API 가중치를 각자의 임계값과 비교하여 하나라도 넘으면 해당 단계로 판단.
    
    가중치는 1분 창 기준이므로 마지막 응답 이후 WEIGHT_WINDOW_SEC가 지나면
    0으로 간주한다 (요청 차단 상태에서도 창이 지나면 해제됨).
    
    SAPI Rate Limit 헤더:
    - X-SAPI-USED-IP-WEIGHT-1M: 1분간 IP 기준 사용 가중치
    - X-SAPI-USED-UID-WEIGHT-1M: 1분간 계정(UID) 기준 사용 가중치
    - X-MBX-USED-WEIGHT-1m: /api 경로(서버 시간 등)의 사용 가중치
    - Retry-After: 429 응답 시 대기 시간 (초)
    """
    
    ip_weight_1m: int = 0
    uid_weight_1m: int = 0
    api_weight_1m: int = 0
    retry_after: int = 0
    last_updated: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    
    def update_from_headers(self, headers: dict[str, Any]) -> None:
        """응답 헤더에서 Rate Limit 정보 업데이트
        
        Args:
            headers: HTTP 응답 헤더 (대소문자 무관)
        """
        headers_lower = {k.lower(): v for k, v in headers.items()}
        
        # 창이 지났으면 이번 응답에 없는 가중치는 0부터 다시 시작
        if self.is_expired:
            self.ip_weight_1m = 0
            self.uid_weight_1m = 0
            self.api_weight_1m = 0
        
        ip_weight = headers_lower.get("x-sapi-used-ip-weight-1m")
        if ip_weight is not None:
            self.ip_weight_1m = int(ip_weight)
        
        uid_weight = headers_lower.get("x-sapi-used-uid-weight-1m")
        if uid_weight is not None:
            self.uid_weight_1m = int(uid_weight)
        
        api_weight = headers_lower.get("x-mbx-used-weight-1m")
        if api_weight is not None:
            self.api_weight_1m = int(api_weight)
        
        retry_after = headers_lower.get("retry-after")
        if retry_after is not None:
            self.retry_after = int(retry_after)
        
        self.last_updated = datetime.now(timezone.utc)
    
    @property
    def elapsed_seconds(self) -> float:
        """마지막 업데이트 이후 경과 시간 (초)"""
        return (datetime.now(timezone.utc) - self.last_updated).total_seconds()
    
    @property
    def is_expired(self) -> bool:
        """가중치 창 만료 여부"""
        return self.elapsed_seconds >= RateLimitThresholds.WEIGHT_WINDOW_SEC
    
    @property
    def seconds_until_reset(self) -> int:
        """가중치 창 만료까지 남은 시간 (초, 최소 1)"""
        remaining = RateLimitThresholds.WEIGHT_WINDOW_SEC - self.elapsed_seconds
        return max(1, math.ceil(remaining))
    
    def _weights(self) -> list[tuple[int, tuple[int, int, int]]]:
        """(유효 가중치, (WARN, SLOW, STOP)) 목록"""
        if self.is_expired:
            ip_weight = uid_weight = api_weight = 0
        else:
            ip_weight = self.ip_weight_1m
            uid_weight = self.uid_weight_1m
            api_weight = self.api_weight_1m
        
        return [
            (ip_weight, (
                RateLimitThresholds.SAPI_IP_WEIGHT_WARN,
                RateLimitThresholds.SAPI_IP_WEIGHT_SLOW,
                RateLimitThresholds.SAPI_IP_WEIGHT_STOP,
            )),
            (uid_weight, (
                RateLimitThresholds.SAPI_UID_WEIGHT_WARN,
                RateLimitThresholds.SAPI_UID_WEIGHT_SLOW,
                RateLimitThresholds.SAPI_UID_WEIGHT_STOP,
            )),
            (api_weight, (
                RateLimitThresholds.WEIGHT_WARN,
                RateLimitThresholds.WEIGHT_SLOW,
                RateLimitThresholds.WEIGHT_STOP,
            )),
        ]
    
    def _reached(self, level: int) -> bool:
        return any(weight >= limits[level] for weight, limits in self._weights())
    
    @property
    def should_warn(self) -> bool:
        """경고 임계값 도달 여부"""
        return self._reached(_WARN)
    
    @property
    def should_slow_down(self) -> bool:
        """속도 저하 필요 여부"""
        return self._reached(_SLOW)
    
    @property
    def should_stop(self) -> bool:
        """요청 중단 필요 여부"""
        return self._reached(_STOP)
    
    @property
    def remaining_weight(self) -> int:
        """남은 가중치 (가장 여유가 적은 한도의 STOP 임계값 기준)"""
        return max(0, min(limits[_STOP] - weight for weight, limits in self._weights()))
    
    def reset(self) -> None:
        """카운터 리셋"""
        self.ip_weight_1m = 0
        self.uid_weight_1m = 0
        self.api_weight_1m = 0
        self.retry_after = 0
        self.last_updated = datetime.now(timezone.utc)
    
    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (로깅용)"""
        return {
            "ip_weight_1m": self.ip_weight_1m,
            "uid_weight_1m": self.uid_weight_1m,
            "api_weight_1m": self.api_weight_1m,
            "retry_after": self.retry_after,
            "last_updated": self.last_updated.isoformat(),
            "should_warn": self.should_warn,
            "should_stop": self.should_stop,
        }
