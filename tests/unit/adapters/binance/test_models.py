"""
Binance Staking 모델 변환 테스트

Binance API 응답 -> 공통 모델 변환 테스트.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from adapters.binance.models import (
    ensure_list,
    ensure_object,
    get_decimal,
    get_int,
    parse_daily_left_quota,
    parse_personal_left_quota,
    parse_purchase_id,
    parse_staking_history,
    parse_staking_position,
    parse_staking_product,
)
from adapters.models import StakingHistoryRecord, StakingPosition, StakingProduct


class TestParseStakingProduct:
    """parse_staking_product 테스트"""

    def test_parse_product(self, binance_staking_product_response: dict) -> None:
        """상품 파싱 (중첩 detail/quota 포함)"""
        product = parse_staking_product(binance_staking_product_response)

        assert isinstance(product, StakingProduct)
        assert product.project_id == "Axs*90"
        assert product.detail.asset == "AXS"
        assert product.detail.reward_asset == "AXS"
        assert product.detail.duration == 90
        assert product.detail.renewable is True
        assert product.detail.apy == Decimal("1.2069")
        assert product.quota.total_personal_quota == Decimal("2")
        assert product.quota.minimum == Decimal("0.001")

    def test_uses_decimal_not_float(self, binance_staking_product_response: dict) -> None:
        """Decimal 타입 확인"""
        product = parse_staking_product(binance_staking_product_response)

        assert isinstance(product.detail.apy, Decimal)
        assert isinstance(product.quota.minimum, Decimal)

    def test_missing_fields_take_zero_values(self) -> None:
        """누락 필드는 0 값"""
        product = parse_staking_product({"projectId": "X"})

        assert product.detail.asset == ""
        assert product.detail.duration == 0
        assert product.detail.renewable is False
        assert product.detail.apy == Decimal("0")
        assert product.quota.total_personal_quota == Decimal("0")

    def test_frozen(self, binance_staking_product_response: dict) -> None:
        """불변성 확인"""
        product = parse_staking_product(binance_staking_product_response)

        with pytest.raises(AttributeError):
            product.project_id = "other"  # type: ignore

    def test_type_mismatch_fails(self, binance_staking_product_response: dict) -> None:
        """duration이 문자열이면 실패"""
        binance_staking_product_response["detail"]["duration"] = "90"

        with pytest.raises(TypeError, match="duration"):
            parse_staking_product(binance_staking_product_response)

    def test_detail_must_be_object(self) -> None:
        with pytest.raises(TypeError, match="detail"):
            parse_staking_product({"projectId": "X", "detail": []})


class TestParseStakingPosition:
    """parse_staking_position 테스트"""

    def test_parse_position(self, binance_staking_position_response: dict) -> None:
        """포지션 파싱 (전체 필드)"""
        position = parse_staking_position(binance_staking_position_response)

        assert isinstance(position, StakingPosition)
        assert position.position_id == 123123
        assert position.product_id == "Axs*90"
        assert position.asset == "AXS"
        assert position.amount == Decimal("122.09202928")
        assert position.purchase_time == 1646182276000
        assert position.duration == 60
        assert position.accrual_days == 4
        assert position.reward_asset == "AXS"
        assert position.reward_amt == Decimal("0.03396501")
        assert position.next_interest_pay == Decimal("1.29295183")
        assert position.pay_interest_period == 1
        assert position.redeem_amount_early == Decimal("2802.24068852")
        assert position.interest_end_date == 1651449600000
        assert position.deliver_date == 1651536000000
        assert position.redeem_period == 1
        assert position.can_redeem_early is True
        assert position.renewable is True
        assert position.type == "AUTO"
        assert position.status == "HOLDING"

    def test_purchased_at(self, binance_staking_position_response: dict) -> None:
        """밀리초 타임스탬프 -> UTC datetime"""
        position = parse_staking_position(binance_staking_position_response)

        assert position.purchased_at == datetime.fromtimestamp(
            1646182276, tz=timezone.utc
        )

    def test_negative_position_id_fails(self, binance_staking_position_response: dict) -> None:
        binance_staking_position_response["positionId"] = -1

        with pytest.raises(ValueError, match="unsigned"):
            parse_staking_position(binance_staking_position_response)

    def test_bool_field_rejects_string(self, binance_staking_position_response: dict) -> None:
        binance_staking_position_response["canRedeemEarly"] = "true"

        with pytest.raises(TypeError, match="canRedeemEarly"):
            parse_staking_position(binance_staking_position_response)

    def test_null_field_takes_zero_value(self, binance_staking_position_response: dict) -> None:
        binance_staking_position_response["rewardAmt"] = None

        position = parse_staking_position(binance_staking_position_response)

        assert position.reward_amt == Decimal("0")


class TestParseStakingHistory:
    """parse_staking_history 테스트"""

    def test_parse_history(self, binance_staking_history_response: dict) -> None:
        record = parse_staking_history(binance_staking_history_response)

        assert isinstance(record, StakingHistoryRecord)
        assert record.position_id == "123123"
        assert record.time == 1575018510000
        assert record.asset == "BNB"
        assert record.project == "BSC"
        assert record.amount == Decimal("21312.23223")
        assert record.lock_period == "30"
        assert record.deliver_date == "1575018510000"
        assert record.type == "AUTO"
        assert record.status == "success"

    def test_occurred_at(self, binance_staking_history_response: dict) -> None:
        record = parse_staking_history(binance_staking_history_response)

        assert record.occurred_at is not None
        assert record.occurred_at.year == 2019

    def test_missing_time(self) -> None:
        record = parse_staking_history({"positionId": "1"})

        assert record.time == 0
        assert record.occurred_at is None


class TestWrapperParsers:
    """단일 필드 래퍼 응답 파서 테스트"""

    def test_purchase_id(self) -> None:
        assert parse_purchase_id({"purchaseId": 40607, "success": True}) == 40607

    def test_purchase_id_missing(self) -> None:
        assert parse_purchase_id({}) == 0

    def test_personal_left_quota(self) -> None:
        assert parse_personal_left_quota({"leftPersonalQuota": "1000"}) == Decimal("1000")

    def test_daily_left_quota(self) -> None:
        quota = parse_daily_left_quota({"asset": "BUSD", "leftQuota": "50000.00000000"})

        assert quota == Decimal("50000.00000000")
        assert isinstance(quota, Decimal)

    def test_wrapper_requires_object(self) -> None:
        with pytest.raises(TypeError, match="JSON object"):
            parse_personal_left_quota(["1000"])


class TestFieldHelpers:
    """필드 추출 헬퍼 테스트"""

    def test_get_int_rejects_bool(self) -> None:
        with pytest.raises(TypeError):
            get_int({"n": True}, "n")

    def test_get_int_rejects_float(self) -> None:
        with pytest.raises(TypeError):
            get_int({"n": 1.5}, "n")

    def test_get_decimal_rejects_number(self) -> None:
        """금액은 문자열로만 받음"""
        with pytest.raises(TypeError):
            get_decimal({"amount": 1.5}, "amount")

    def test_get_decimal_invalid_string(self) -> None:
        with pytest.raises(ValueError, match="invalid decimal"):
            get_decimal({"amount": "abc"}, "amount")

    def test_get_decimal_empty_string(self) -> None:
        assert get_decimal({"amount": ""}, "amount") == Decimal("0")

    def test_ensure_list_null(self) -> None:
        assert ensure_list(None) == []

    def test_ensure_list_rejects_object(self) -> None:
        with pytest.raises(TypeError, match="JSON array"):
            ensure_list({"a": 1})

    def test_ensure_list_rejects_scalar_items(self) -> None:
        with pytest.raises(TypeError, match=r"\[1\]"):
            ensure_list([{}, 2])

    def test_ensure_object(self) -> None:
        assert ensure_object({"a": 1}) == {"a": 1}
