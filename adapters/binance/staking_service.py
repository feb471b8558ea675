"""
Binance Staking Endpoint 서비스

엔드포인트 하나당 서비스 하나.
각 서비스는 불변 설정 객체이며 with_* 메서드는 새 인스턴스를 반환한다.

사용 예시:
```python
service = (
    client.new_list_staking_products_service()
    .with_asset("BNB")
    .with_current(2)
    .with_size(50)
)
products = await service.execute()
```

파라미터 포함 규칙:
- 선택 파라미터: None이 아닐 때만 전송 (0, ""도 명시하면 전송)
- 필수 파라미터: 값과 무관하게 항상 전송
"""

import json
import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from adapters.binance.models import (
    ensure_list,
    parse_daily_left_quota,
    parse_personal_left_quota,
    parse_purchase_id,
    parse_staking_history,
    parse_staking_position,
    parse_staking_product,
)
from adapters.binance.rate_limiter import StakingDecodeError
from adapters.binance.request import Request, RequestOptions, RequestParams
from adapters.models import StakingHistoryRecord, StakingPosition, StakingProduct
from core.constants import StakingPaths
from core.types import SecurityType, StakingProductType, StakingTxnType, enum_value

if TYPE_CHECKING:
    from adapters.interfaces import ITransportClient

logger = logging.getLogger(__name__)

T = TypeVar("T")

_SelfService = TypeVar("_SelfService", bound="StakingService")


def decode_response(
    path: str,
    payload: bytes,
    parser: Callable[[Any], T],
) -> T:
    """원본 응답 바이트 -> 타입 모델

    Args:
        path: 요청 API 경로 (에러 메시지용)
        payload: 응답 본문
        parser: JSON 값 -> 모델 변환 함수

    Raises:
        StakingDecodeError: JSON 파싱 실패 또는 형태 불일치
    """
    try:
        data = json.loads(payload)
        return parser(data)
    except (ValueError, TypeError) as e:
        logger.error(
            "Staking 응답 디코딩 실패",
            extra={"path": path, "error": str(e), "payload_size": len(payload)},
        )
        raise StakingDecodeError(path=path, message=str(e), payload=payload) from e


def _parse_list(parser: Callable[[dict[str, Any]], T]) -> Callable[[Any], list[T]]:
    def parse(data: Any) -> list[T]:
        return [parser(item) for item in ensure_list(data)]

    return parse


@dataclass(frozen=True)
class StakingService:
    """Staking 서비스 공통 베이스

    Attributes:
        client: 요청을 실행할 전송 클라이언트
    """

    client: "ITransportClient"

    def _with(self: _SelfService, **changes: Any) -> _SelfService:
        return replace(self, **changes)

    def build_request(self) -> Request:
        """현재 설정으로 요청 기술자 생성"""
        raise NotImplementedError

    async def _call(
        self,
        parser: Callable[[Any], T],
        recv_window: int | None,
        headers: dict[str, str] | None,
        timeout: float | None,
    ) -> T:
        """요청 1회 실행 후 디코딩

        전송 계층 에러는 그대로 전파된다 (재시도/변환 없음).
        """
        request = self.build_request()
        options = RequestOptions(
            recv_window=recv_window,
            headers=dict(headers) if headers else {},
            timeout=timeout,
        )

        logger.debug(
            "Staking 요청 실행",
            extra={"method": request.method, "path": request.path, "params": request.params},
        )

        payload = await self.client.call_api(request, options)
        return decode_response(request.path, payload, parser)


@dataclass(frozen=True)
class ListStakingProductsService(StakingService):
    """Staking 상품 목록 조회

    GET /sapi/v1/staking/productList (USER_DATA)
    """

    product: str | None = None
    asset: str | None = None
    current: int | None = None
    size: int | None = None

    def with_product(self, product: StakingProductType | str) -> "ListStakingProductsService":
        return self._with(product=enum_value(product))

    def with_asset(self, asset: str) -> "ListStakingProductsService":
        return self._with(asset=asset)

    def with_current(self, current: int) -> "ListStakingProductsService":
        """조회 페이지 (서버 기본 1, 최소 1)"""
        return self._with(current=current)

    def with_size(self, size: int) -> "ListStakingProductsService":
        """페이지 크기 (서버 기본 10, 최대 100)"""
        return self._with(size=size)

    def build_request(self) -> Request:
        params = (
            RequestParams()
            .set_optional("product", self.product)
            .set_optional("asset", self.asset)
            .set_optional("current", self.current)
            .set_optional("size", self.size)
        )
        return Request(
            method="GET",
            path=StakingPaths.PRODUCT_LIST,
            security=SecurityType.SIGNED,
            query=params.to_dict(),
        )

    async def execute(
        self,
        *,
        recv_window: int | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> list[StakingProduct]:
        return await self._call(
            _parse_list(parse_staking_product), recv_window, headers, timeout
        )


@dataclass(frozen=True)
class PurchaseStakingProductService(StakingService):
    """Staking 상품 구매

    POST /sapi/v1/staking/purchase (TRADE)

    product, productId, amount는 미설정 상태여도 항상 전송된다.
    amount는 Binance 문서상 타입에 맞춰 float로 전송되며,
    조회 응답의 금액 필드(문자열 -> Decimal)와 표현이 다르다.
    쿼리스트링에는 Python float 표기 그대로 실린다
    (0 -> "amount=0.0", 0.00001 -> "amount=1e-05").
    """

    product: str = ""
    product_id: str = ""
    amount: float = 0.0

    def with_product(self, product: StakingProductType | str) -> "PurchaseStakingProductService":
        return self._with(product=enum_value(product))

    def with_product_id(self, product_id: str) -> "PurchaseStakingProductService":
        return self._with(product_id=product_id)

    def with_amount(self, amount: float | Decimal) -> "PurchaseStakingProductService":
        return self._with(amount=float(amount))

    def build_request(self) -> Request:
        params = (
            RequestParams()
            .set_required("product", self.product)
            .set_required("productId", self.product_id)
            .set_required("amount", self.amount)
        )
        return Request(
            method="POST",
            path=StakingPaths.PURCHASE,
            security=SecurityType.SIGNED,
            query=params.to_dict(),
        )

    async def execute(
        self,
        *,
        recv_window: int | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> int:
        """구매 실행

        Returns:
            purchaseId
        """
        purchase_id = await self._call(parse_purchase_id, recv_window, headers, timeout)
        logger.info(
            "Staking 상품 구매 완료",
            extra={
                "product": self.product,
                "product_id": self.product_id,
                "amount": self.amount,
                "purchase_id": purchase_id,
            },
        )
        return purchase_id


@dataclass(frozen=True)
class GetStakingPersonalLeftQuotaService(StakingService):
    """상품별 개인 잔여 한도 조회

    GET /sapi/v1/staking/personalLeftQuota (USER_DATA)
    파라미터는 폼 본문으로 전송된다.
    """

    product: str = ""
    product_id: str = ""

    def with_product(
        self, product: StakingProductType | str
    ) -> "GetStakingPersonalLeftQuotaService":
        return self._with(product=enum_value(product))

    def with_product_id(self, product_id: str) -> "GetStakingPersonalLeftQuotaService":
        return self._with(product_id=product_id)

    def build_request(self) -> Request:
        params = (
            RequestParams()
            .set_required("product", self.product)
            .set_required("productId", self.product_id)
        )
        return Request(
            method="GET",
            path=StakingPaths.PERSONAL_LEFT_QUOTA,
            security=SecurityType.SIGNED,
            form=params.to_dict(),
        )

    async def execute(
        self,
        *,
        recv_window: int | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> Decimal:
        """Returns: leftPersonalQuota"""
        return await self._call(parse_personal_left_quota, recv_window, headers, timeout)


@dataclass(frozen=True)
class GetStakingProductPositionService(StakingService):
    """Staking 보유 포지션 조회

    GET /sapi/v1/staking/position (USER_DATA)
    """

    product: str | None = None
    product_id: str | None = None
    asset: str | None = None
    current: int | None = None
    size: int | None = None

    def with_product(
        self, product: StakingProductType | str
    ) -> "GetStakingProductPositionService":
        return self._with(product=enum_value(product))

    def with_product_id(self, product_id: str) -> "GetStakingProductPositionService":
        return self._with(product_id=product_id)

    def with_asset(self, asset: str) -> "GetStakingProductPositionService":
        return self._with(asset=asset)

    def with_current(self, current: int) -> "GetStakingProductPositionService":
        return self._with(current=current)

    def with_size(self, size: int) -> "GetStakingProductPositionService":
        return self._with(size=size)

    def build_request(self) -> Request:
        params = (
            RequestParams()
            .set_optional("product", self.product)
            .set_optional("productId", self.product_id)
            .set_optional("asset", self.asset)
            .set_optional("current", self.current)
            .set_optional("size", self.size)
        )
        return Request(
            method="GET",
            path=StakingPaths.POSITION,
            security=SecurityType.SIGNED,
            query=params.to_dict(),
        )

    async def execute(
        self,
        *,
        recv_window: int | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> list[StakingPosition]:
        return await self._call(
            _parse_list(parse_staking_position), recv_window, headers, timeout
        )


@dataclass(frozen=True)
class GetStakingHistoryService(StakingService):
    """Staking 거래 이력 조회

    GET /sapi/v1/staking/stakingRecord (USER_DATA)
    product, txnType은 항상 전송된다.
    """

    product: str = ""
    txn_type: str = ""
    asset: str | None = None
    start_time: int | None = None
    end_time: int | None = None
    current: int | None = None
    size: int | None = None

    def with_product(self, product: StakingProductType | str) -> "GetStakingHistoryService":
        return self._with(product=enum_value(product))

    def with_txn_type(self, txn_type: StakingTxnType | str) -> "GetStakingHistoryService":
        return self._with(txn_type=enum_value(txn_type))

    def with_asset(self, asset: str) -> "GetStakingHistoryService":
        return self._with(asset=asset)

    def with_start_time(self, start_time: int) -> "GetStakingHistoryService":
        """조회 시작 시간 (밀리초 타임스탬프)"""
        return self._with(start_time=start_time)

    def with_end_time(self, end_time: int) -> "GetStakingHistoryService":
        """조회 종료 시간 (밀리초 타임스탬프)"""
        return self._with(end_time=end_time)

    def with_current(self, current: int) -> "GetStakingHistoryService":
        return self._with(current=current)

    def with_size(self, size: int) -> "GetStakingHistoryService":
        return self._with(size=size)

    def build_request(self) -> Request:
        params = (
            RequestParams()
            .set_required("product", self.product)
            .set_required("txnType", self.txn_type)
            .set_optional("asset", self.asset)
            .set_optional("startTime", self.start_time)
            .set_optional("endTime", self.end_time)
            .set_optional("current", self.current)
            .set_optional("size", self.size)
        )
        return Request(
            method="GET",
            path=StakingPaths.STAKING_RECORD,
            security=SecurityType.SIGNED,
            query=params.to_dict(),
        )

    async def execute(
        self,
        *,
        recv_window: int | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> list[StakingHistoryRecord]:
        return await self._call(
            _parse_list(parse_staking_history), recv_window, headers, timeout
        )


@dataclass(frozen=True)
class GetStakingLeftDailyPurchaseQuotaService(StakingService):
    """일일 잔여 구매 한도 조회

    GET /sapi/v1/lending/daily/userLeftQuota (USER_DATA)
    """

    product_id: str = ""

    def with_product_id(self, product_id: str) -> "GetStakingLeftDailyPurchaseQuotaService":
        return self._with(product_id=product_id)

    def build_request(self) -> Request:
        params = RequestParams().set_required("productId", self.product_id)
        return Request(
            method="GET",
            path=StakingPaths.DAILY_LEFT_QUOTA,
            security=SecurityType.SIGNED,
            query=params.to_dict(),
        )

    async def execute(
        self,
        *,
        recv_window: int | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> Decimal:
        """Returns: leftQuota"""
        return await self._call(parse_daily_left_quota, recv_window, headers, timeout)
