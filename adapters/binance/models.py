"""
Binance Staking API 응답 -> 공통 모델 변환

Binance SAPI Staking 응답을 adapters.models의 표준 모델로 변환.
모든 금액/수량은 문자열에서 Decimal로 변환.

파싱 규칙:
- 알 수 없는 필드는 무시
- 누락 필드(또는 null)는 0 값 ("", 0, False, Decimal("0"))
- 타입이 맞지 않으면 ValueError/TypeError 발생
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from adapters.models import (
    StakingHistoryRecord,
    StakingPosition,
    StakingProduct,
    StakingProductDetail,
    StakingProductQuota,
)


# -------------------------------------------------------------------------
# 필드 추출 헬퍼
# -------------------------------------------------------------------------

def _type_name(value: Any) -> str:
    return type(value).__name__


def get_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"'{key}': expected string, got {_type_name(value)}")
    return value


def get_int(data: dict[str, Any], key: str, unsigned: bool = False) -> int:
    value = data.get(key)
    if value is None:
        return 0
    # bool은 int의 서브클래스이므로 별도 제외
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"'{key}': expected integer, got {_type_name(value)}")
    if unsigned and value < 0:
        raise ValueError(f"'{key}': expected unsigned integer, got {value}")
    return value


def get_bool(data: dict[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise TypeError(f"'{key}': expected boolean, got {_type_name(value)}")
    return value


def get_decimal(data: dict[str, Any], key: str) -> Decimal:
    """문자열 금액 필드 -> Decimal (빈 문자열은 0)"""
    raw = get_str(data, key)
    if raw == "":
        return Decimal("0")
    try:
        return Decimal(raw)
    except InvalidOperation as e:
        raise ValueError(f"'{key}': invalid decimal string {raw!r}") from e


def get_object(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise TypeError(f"'{key}': expected object, got {_type_name(value)}")
    return value


def ensure_object(data: Any) -> dict[str, Any]:
    """최상위 응답이 JSON 객체인지 확인"""
    if not isinstance(data, dict):
        raise TypeError(f"expected JSON object, got {_type_name(data)}")
    return data


def ensure_list(data: Any) -> list[dict[str, Any]]:
    """최상위 응답이 객체 배열인지 확인 (null은 빈 목록)"""
    if data is None:
        return []
    if not isinstance(data, list):
        raise TypeError(f"expected JSON array, got {_type_name(data)}")
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise TypeError(f"[{index}]: expected object, got {_type_name(item)}")
    return data


# -------------------------------------------------------------------------
# 응답 파서
# -------------------------------------------------------------------------

def parse_staking_product(data: dict[str, Any]) -> StakingProduct:
    """Binance 상품 응답 -> StakingProduct 모델

    Binance GET /sapi/v1/staking/productList 응답 항목 예시:
    {
        "projectId": "Axs*90",
        "detail": {
            "asset": "AXS",
            "rewardAsset": "AXS",
            "duration": 90,
            "renewable": true,
            "apy": "1.2069"
        },
        "quota": {
            "totalPersonalQuota": "2",
            "minimum": "0.001"
        }
    }
    """
    detail = get_object(data, "detail")
    quota = get_object(data, "quota")

    return StakingProduct(
        project_id=get_str(data, "projectId"),
        detail=StakingProductDetail(
            asset=get_str(detail, "asset"),
            reward_asset=get_str(detail, "rewardAsset"),
            duration=get_int(detail, "duration"),
            renewable=get_bool(detail, "renewable"),
            apy=get_decimal(detail, "apy"),
        ),
        quota=StakingProductQuota(
            total_personal_quota=get_decimal(quota, "totalPersonalQuota"),
            minimum=get_decimal(quota, "minimum"),
        ),
    )


def parse_staking_position(data: dict[str, Any]) -> StakingPosition:
    """Binance 포지션 응답 -> StakingPosition 모델

    Binance GET /sapi/v1/staking/position 응답 항목 예시:
    {
        "positionId": 123123,
        "productId": "Axs*90",
        "asset": "AXS",
        "amount": "122.09202928",
        "purchaseTime": 1646182276000,
        "duration": 60,
        "accrualDays": 4,
        "rewardAsset": "AXS",
        "rewardAmt": "0.03396501",
        "nextInterestPay": "1.29295183",
        "payInterestPeriod": 1,
        "redeemAmountEarly": "2802.24068852",
        "interestEndDate": 1651449600000,
        "deliverDate": 1651536000000,
        "redeemPeriod": 1,
        "canRedeemEarly": true,
        "renewable": true,
        "type": "AUTO",
        "status": "HOLDING"
    }
    """
    return StakingPosition(
        position_id=get_int(data, "positionId", unsigned=True),
        product_id=get_str(data, "productId"),
        asset=get_str(data, "asset"),
        amount=get_decimal(data, "amount"),
        purchase_time=get_int(data, "purchaseTime"),
        duration=get_int(data, "duration"),
        accrual_days=get_int(data, "accrualDays"),
        reward_asset=get_str(data, "rewardAsset"),
        reward_amt=get_decimal(data, "rewardAmt"),
        next_interest_pay=get_decimal(data, "nextInterestPay"),
        pay_interest_period=get_int(data, "payInterestPeriod"),
        redeem_amount_early=get_decimal(data, "redeemAmountEarly"),
        interest_end_date=get_int(data, "interestEndDate"),
        deliver_date=get_int(data, "deliverDate"),
        redeem_period=get_int(data, "redeemPeriod"),
        can_redeem_early=get_bool(data, "canRedeemEarly"),
        renewable=get_bool(data, "renewable"),
        type=get_str(data, "type"),
        status=get_str(data, "status"),
    )


def parse_staking_history(data: dict[str, Any]) -> StakingHistoryRecord:
    """Binance 이력 응답 -> StakingHistoryRecord 모델

    Binance GET /sapi/v1/staking/stakingRecord 응답 항목 예시:
    {
        "positionId": "123123",
        "time": 1575018510000,
        "asset": "BNB",
        "project": "BSC",
        "amount": "21312.23223",
        "lockPeriod": "30",
        "deliverDate": "1575018510000",
        "type": "AUTO",
        "status": "success"
    }
    """
    return StakingHistoryRecord(
        position_id=get_str(data, "positionId"),
        time=get_int(data, "time"),
        asset=get_str(data, "asset"),
        project=get_str(data, "project"),
        amount=get_decimal(data, "amount"),
        lock_period=get_str(data, "lockPeriod"),
        deliver_date=get_str(data, "deliverDate"),
        type=get_str(data, "type"),
        status=get_str(data, "status"),
    )


def parse_purchase_id(data: Any) -> int:
    """구매 응답에서 purchaseId 추출

    응답 예시: {"purchaseId": 40607, "success": true}
    """
    return get_int(ensure_object(data), "purchaseId", unsigned=True)


def parse_personal_left_quota(data: Any) -> Decimal:
    """개인 잔여 한도 응답에서 leftPersonalQuota 추출

    응답 예시: {"leftPersonalQuota": "1000"}
    """
    return get_decimal(ensure_object(data), "leftPersonalQuota")


def parse_daily_left_quota(data: Any) -> Decimal:
    """일일 잔여 구매 한도 응답에서 leftQuota 추출

    응답 예시: {"asset": "BUSD", "leftQuota": "50000.00000000"}
    """
    return get_decimal(ensure_object(data), "leftQuota")
