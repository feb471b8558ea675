"""
어댑터 공통 데이터 모델

Staking API 응답을 표준화한 도메인 모델.
모든 금액/수량/이율은 Decimal 타입 사용 (문자열 응답에서 변환).
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal


def _ms_to_datetime(timestamp_ms: int) -> datetime | None:
    """밀리초 타임스탬프 -> UTC datetime (0이면 None)"""
    if not timestamp_ms:
        return None
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)


@dataclass(frozen=True)
class StakingProductDetail:
    """상품 상세 조건

    Attributes:
        asset: 예치 자산 (예: BNB)
        reward_asset: 보상 자산
        duration: 잠금 기간 (일)
        renewable: 자동 갱신 가능 여부
        apy: 연이율 (예: 0.0503 = 5.03%)
    """

    asset: str = ""
    reward_asset: str = ""
    duration: int = 0
    renewable: bool = False
    apy: Decimal = Decimal("0")


@dataclass(frozen=True)
class StakingProductQuota:
    """상품 한도

    Attributes:
        total_personal_quota: 개인 총 한도
        minimum: 최소 구매 수량
    """

    total_personal_quota: Decimal = Decimal("0")
    minimum: Decimal = Decimal("0")


@dataclass(frozen=True)
class StakingProduct:
    """Staking 상품

    Attributes:
        project_id: 상품 ID (purchase의 productId로 사용)
        detail: 상품 상세 조건
        quota: 상품 한도
    """

    project_id: str
    detail: StakingProductDetail
    quota: StakingProductQuota


@dataclass(frozen=True)
class StakingPosition:
    """Staking 보유 포지션

    시간 필드는 Binance 응답 그대로 밀리초 타임스탬프.
    """

    position_id: int
    product_id: str
    asset: str
    amount: Decimal
    purchase_time: int = 0
    duration: int = 0
    accrual_days: int = 0
    reward_asset: str = ""
    reward_amt: Decimal = Decimal("0")
    next_interest_pay: Decimal = Decimal("0")
    pay_interest_period: int = 0
    redeem_amount_early: Decimal = Decimal("0")
    interest_end_date: int = 0
    deliver_date: int = 0
    redeem_period: int = 0
    can_redeem_early: bool = False
    renewable: bool = False
    type: str = ""
    status: str = ""

    @property
    def purchased_at(self) -> datetime | None:
        """구매 시각 (UTC)"""
        return _ms_to_datetime(self.purchase_time)

    @property
    def interest_end_at(self) -> datetime | None:
        """이자 종료 시각 (UTC)"""
        return _ms_to_datetime(self.interest_end_date)


@dataclass(frozen=True)
class StakingHistoryRecord:
    """Staking 거래 이력

    lock_period, deliver_date는 Binance가 문자열로 내려주므로 그대로 보존.
    """

    position_id: str
    time: int
    asset: str
    project: str = ""
    amount: Decimal = Decimal("0")
    lock_period: str = ""
    deliver_date: str = ""
    type: str = ""
    status: str = ""

    @property
    def occurred_at(self) -> datetime | None:
        """거래 시각 (UTC)"""
        return _ms_to_datetime(self.time)
