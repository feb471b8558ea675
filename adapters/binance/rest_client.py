"""
Binance SAPI REST 전송 클라이언트

HMAC-SHA256 서명, Rate Limit 추적, 재시도 담당.
ITransportClient Protocol 준수.
"""

import asyncio
import hashlib
import hmac
import logging
import time
from typing import Any
from urllib.parse import urlencode

import httpx

from adapters.binance.rate_limiter import (
    RateLimitTracker,
    RateLimitError,
    BinanceApiError,
)
from adapters.binance.request import Request, RequestOptions
from adapters.binance.staking_service import (
    ListStakingProductsService,
    PurchaseStakingProductService,
    GetStakingPersonalLeftQuotaService,
    GetStakingProductPositionService,
    GetStakingHistoryService,
    GetStakingLeftDailyPurchaseQuotaService,
)
from core.constants import BinanceEndpoints, Defaults, StakingPaths
from core.types import SecurityType

logger = logging.getLogger(__name__)

# 서명 관련 에러 코드 (시간 재동기화 후 재시도)
TIMESTAMP_ERROR_CODES = (-1021, -1022)


class BinanceRestClient:
    """Binance SAPI REST 전송 클라이언트

    ITransportClient Protocol 구현.
    Staking 서비스는 이 클라이언트의 call_api를 통해서만 요청을 보낸다.

    Args:
        api_key: API 키
        api_secret: API 시크릿
        base_url: REST API 베이스 URL
        timeout: 요청 타임아웃 (초)
        max_retries: 최대 재시도 횟수 (429/네트워크 에러 시)
        recv_window: 기본 recvWindow (밀리초)
    """

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        base_url: str = BinanceEndpoints.PROD_REST_URL,
        timeout: float = Defaults.REQUEST_TIMEOUT_SEC,
        max_retries: int = Defaults.MAX_RETRIES,
        recv_window: int = Defaults.RECV_WINDOW_MS,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.recv_window = recv_window

        self.rate_tracker = RateLimitTracker()
        self._client: httpx.AsyncClient | None = None

        # 서버 시간 동기화용 오프셋 (밀리초)
        self._time_offset: int = 0
        self._time_synced: bool = False

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 가져오기 (lazy initialization)"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """HTTP 클라이언트 종료"""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def _generate_signature(self, payload: str) -> str:
        """HMAC-SHA256 서명 생성

        Args:
            payload: 쿼리스트링 + 폼 본문을 이어붙인 문자열

        Returns:
            16진수 서명 문자열
        """
        return hmac.new(
            self.api_secret.encode("utf-8"),
            payload.encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()

    def _get_timestamp(self) -> int:
        """서버 시간 오프셋이 적용된 타임스탬프 반환 (밀리초)"""
        return int(time.time() * 1000) + self._time_offset

    async def get_server_time(self) -> int:
        """서버 시간 조회 (밀리초)"""
        request = Request(method="GET", path=StakingPaths.SERVER_TIME)
        response = await self._send(request, None)
        return int(response.json()["serverTime"])

    async def sync_time(self) -> int:
        """서버 시간과 동기화

        로컬 시간과 서버 시간의 차이를 계산하여 오프셋 저장.

        Returns:
            계산된 시간 오프셋 (밀리초)
        """
        local_time = int(time.time() * 1000)
        server_time = await self.get_server_time()
        self._time_offset = server_time - local_time
        self._time_synced = True

        logger.info(
            "서버 시간 동기화 완료",
            extra={"offset_ms": self._time_offset},
        )

        return self._time_offset

    async def _ensure_time_synced(self) -> None:
        """시간 동기화가 필요하면 수행"""
        if not self._time_synced:
            await self.sync_time()

    def _build_url(
        self,
        request: Request,
        options: RequestOptions | None,
    ) -> tuple[str, str]:
        """최종 URL과 폼 본문 생성

        서명 요청은 timestamp/recvWindow를 쿼리에 추가하고
        "쿼리스트링 + 폼 본문"에 대한 서명을 쿼리 끝에 붙인다.

        Returns:
            (URL, 폼 본문)
        """
        query = dict(request.query)
        body = request.encoded_form()

        if request.signed:
            recv_window = self.recv_window
            if options is not None and options.recv_window is not None:
                recv_window = options.recv_window
            query["timestamp"] = self._get_timestamp()
            query["recvWindow"] = recv_window

        query_string = urlencode(query)
        if request.signed:
            signature = self._generate_signature(query_string + body)
            query_string = f"{query_string}&signature={signature}"

        url = f"{self.base_url}{request.path}"
        if query_string:
            url = f"{url}?{query_string}"
        return url, body

    @staticmethod
    def _can_resend(request: Request, error: httpx.RequestError) -> bool:
        """전송 실패 후 재전송 가능 여부

        GET은 항상 재전송. 그 외 메서드(구매 POST 등)는 서버가 이미 처리했을 수
        있으므로 연결 단계 실패(요청 미전송)만 재전송한다.
        """
        if request.method.upper() == "GET":
            return True
        return isinstance(error, (httpx.ConnectError, httpx.ConnectTimeout))

    async def _send(
        self,
        request: Request,
        options: RequestOptions | None,
    ) -> httpx.Response:
        """요청 실행 (재시도 포함)

        Raises:
            RateLimitError: 429 응답 또는 가중치 임계값 도달 시
            BinanceApiError: API 에러 응답 시
        """
        # Rate Limit 체크
        if self.rate_tracker.should_stop:
            logger.warning(
                "Rate limit threshold reached",
                extra={"rate_info": self.rate_tracker.to_dict()},
            )
            raise RateLimitError(
                retry_after=self.rate_tracker.seconds_until_reset,
                message="Request weight threshold reached",
            )

        headers: dict[str, str] = {}
        if request.security != SecurityType.NONE:
            headers["X-MBX-APIKEY"] = self.api_key
        if request.form:
            headers["Content-Type"] = "application/x-www-form-urlencoded"
        if options is not None:
            headers.update(options.headers)

        extra_kwargs: dict[str, Any] = {}
        if options is not None and options.timeout is not None:
            extra_kwargs["timeout"] = options.timeout

        client = await self._get_client()

        for attempt in range(self.max_retries):
            # 매 시도마다 URL 새로 생성 (타임스탬프 갱신)
            if request.signed:
                await self._ensure_time_synced()
            url, body = self._build_url(request, options)

            logger.debug(
                "Binance 요청",
                extra={"method": request.method, "path": request.path, "attempt": attempt + 1},
            )

            try:
                response = await client.request(
                    request.method,
                    url,
                    content=body or None,
                    headers=headers,
                    **extra_kwargs,
                )

                # Rate Limit 헤더 추적
                self.rate_tracker.update_from_headers(dict(response.headers))
                if self.rate_tracker.should_warn:
                    logger.warning(
                        "Rate limit weight high",
                        extra={"rate_info": self.rate_tracker.to_dict()},
                    )

                # 429 처리
                if response.status_code == 429:
                    retry_after = int(response.headers.get("Retry-After", 30))
                    logger.warning(
                        "Rate limited by Binance",
                        extra={"retry_after": retry_after, "attempt": attempt + 1},
                    )

                    if attempt < self.max_retries - 1:
                        await asyncio.sleep(retry_after)
                        continue

                    raise RateLimitError(retry_after=retry_after)

                # 기타 HTTP 에러
                if response.status_code >= 400:
                    try:
                        error_data = response.json()
                        code = error_data.get("code", response.status_code)
                        message = error_data.get("msg", response.text)
                    except Exception:
                        code = response.status_code
                        message = response.text

                    # 타임스탬프 오류 시 시간 재동기화 후 재시도
                    if code in TIMESTAMP_ERROR_CODES and attempt < self.max_retries - 1:
                        logger.warning(
                            "타임스탬프 오류, 시간 재동기화",
                            extra={"code": code, "attempt": attempt + 1},
                        )
                        await self.sync_time()
                        continue

                    raise BinanceApiError(code=code, message=message)

                return response

            except httpx.TimeoutException as e:
                logger.warning(
                    "Request timeout",
                    extra={"path": request.path, "attempt": attempt + 1},
                )
                if attempt < self.max_retries - 1 and self._can_resend(request, e):
                    await asyncio.sleep(1 * (attempt + 1))
                    continue
                raise

            except httpx.RequestError as e:
                logger.error(
                    "Request error",
                    extra={"path": request.path, "error": str(e), "attempt": attempt + 1},
                )
                if attempt < self.max_retries - 1 and self._can_resend(request, e):
                    await asyncio.sleep(1 * (attempt + 1))
                    continue
                raise

        # 모든 재시도 실패
        raise BinanceApiError(code=-1, message="All retries failed")

    async def call_api(
        self,
        request: Request,
        options: RequestOptions | None = None,
    ) -> bytes:
        """요청 실행 후 원본 응답 바이트 반환

        Args:
            request: 요청 기술자
            options: 요청 단위 오버라이드 (recvWindow, 헤더, 타임아웃)

        Returns:
            응답 본문 바이트 (디코딩은 호출자 책임)
        """
        response = await self._send(request, options)
        return response.content

    # -------------------------------------------------------------------------
    # Staking 서비스 팩토리
    # -------------------------------------------------------------------------

    def new_list_staking_products_service(self) -> ListStakingProductsService:
        return ListStakingProductsService(client=self)

    def new_purchase_staking_product_service(self) -> PurchaseStakingProductService:
        return PurchaseStakingProductService(client=self)

    def new_get_staking_personal_left_quota_service(
        self,
    ) -> GetStakingPersonalLeftQuotaService:
        return GetStakingPersonalLeftQuotaService(client=self)

    def new_get_staking_product_position_service(
        self,
    ) -> GetStakingProductPositionService:
        return GetStakingProductPositionService(client=self)

    def new_get_staking_history_service(self) -> GetStakingHistoryService:
        return GetStakingHistoryService(client=self)

    def new_get_staking_left_daily_purchase_quota_service(
        self,
    ) -> GetStakingLeftDailyPurchaseQuotaService:
        return GetStakingLeftDailyPurchaseQuotaService(client=self)

    # -------------------------------------------------------------------------
    # 컨텍스트 매니저
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "BinanceRestClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
