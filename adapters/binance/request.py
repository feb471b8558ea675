"""
Binance 요청 기술자 (Request Descriptor)

HTTP 메서드, 경로, 보안 분류, 파라미터를 한 번에 묶어
Transport 클라이언트에 전달하는 값 객체.
"""

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

from core.types import SecurityType


class RequestParams:
    """순서 보존 파라미터 빌더

    - set_required: 값과 무관하게 항상 포함 (빈 문자열, 0 포함)
    - set_optional: 값이 None이 아닐 때만 포함

    0이나 빈 문자열도 명시적으로 설정하면 전송되므로
    "미설정"과 "0"을 구분할 수 있다.
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def set_required(self, name: str, value: Any) -> "RequestParams":
        self._values[name] = value
        return self

    def set_optional(self, name: str, value: Any | None) -> "RequestParams":
        if value is not None:
            self._values[name] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """렌더링된 파라미터 (복사본)"""
        return dict(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values


@dataclass(frozen=True)
class RequestOptions:
    """요청 단위 오버라이드

    Attributes:
        recv_window: recvWindow 오버라이드 (밀리초)
        headers: 추가 HTTP 헤더
        timeout: 요청 타임아웃 오버라이드 (초)
    """

    recv_window: int | None = None
    headers: dict[str, str] = field(default_factory=dict)
    timeout: float | None = None


@dataclass(frozen=True)
class Request:
    """요청 기술자 (실행마다 새로 생성)

    Attributes:
        method: HTTP 메서드 (GET, POST ...)
        path: API 경로 (예: /sapi/v1/staking/position)
        security: 보안 분류
        query: 쿼리스트링 파라미터
        form: x-www-form-urlencoded 본문 파라미터
    """

    method: str
    path: str
    security: SecurityType = SecurityType.NONE
    query: dict[str, Any] = field(default_factory=dict)
    form: dict[str, Any] = field(default_factory=dict)

    @property
    def signed(self) -> bool:
        return self.security == SecurityType.SIGNED

    @property
    def params(self) -> dict[str, Any]:
        """쿼리 + 폼 파라미터 전체 (로깅/테스트용)"""
        return {**self.query, **self.form}

    def encoded_form(self) -> str:
        """URL 인코딩된 폼 본문 (없으면 빈 문자열)"""
        return urlencode(self.form) if self.form else ""
