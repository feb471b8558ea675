"""
어댑터 테스트 픽스처

공통 테스트 설정 및 픽스처 제공.
"""

import pytest

from adapters.mock.transport_client import MockTransportClient


# -------------------------------------------------------------------------
# Mock 클라이언트 픽스처
# -------------------------------------------------------------------------

@pytest.fixture
def mock_transport() -> MockTransportClient:
    """Mock 전송 클라이언트"""
    return MockTransportClient()


# -------------------------------------------------------------------------
# Binance Staking 응답 픽스처
# -------------------------------------------------------------------------

@pytest.fixture
def binance_staking_product_response() -> dict:
    """Binance GET /sapi/v1/staking/productList 응답 항목"""
    return {
        "projectId": "Axs*90",
        "detail": {
            "asset": "AXS",
            "rewardAsset": "AXS",
            "duration": 90,
            "renewable": True,
            "apy": "1.2069",
        },
        "quota": {
            "totalPersonalQuota": "2",
            "minimum": "0.001",
        },
    }


@pytest.fixture
def binance_staking_products_response(binance_staking_product_response: dict) -> list:
    """상품 목록 응답 (2개)"""
    second = {
        "projectId": "BNB*30",
        "detail": {
            "asset": "BNB",
            "rewardAsset": "BNB",
            "duration": 30,
            "renewable": False,
            "apy": "0.0503",
        },
        "quota": {
            "totalPersonalQuota": "500",
            "minimum": "0.1",
        },
        "unknownField": "ignored",
    }
    return [binance_staking_product_response, second]


@pytest.fixture
def binance_staking_position_response() -> dict:
    """Binance GET /sapi/v1/staking/position 응답 항목"""
    return {
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
        "canRedeemEarly": True,
        "renewable": True,
        "type": "AUTO",
        "status": "HOLDING",
    }


@pytest.fixture
def binance_staking_history_response() -> dict:
    """Binance GET /sapi/v1/staking/stakingRecord 응답 항목"""
    return {
        "positionId": "123123",
        "time": 1575018510000,
        "asset": "BNB",
        "project": "BSC",
        "amount": "21312.23223",
        "lockPeriod": "30",
        "deliverDate": "1575018510000",
        "type": "AUTO",
        "status": "success",
    }
