"""
Binance 어댑터

Binance SAPI Staking 엔드포인트 연동을 담당.
전송 클라이언트(서명/재시도)와 엔드포인트별 서비스로 구성.
"""

from adapters.binance.rest_client import BinanceRestClient
from adapters.binance.rate_limiter import (
    RateLimitTracker,
    RateLimitError,
    BinanceApiError,
    StakingDecodeError,
)
from adapters.binance.request import Request, RequestOptions, RequestParams
from adapters.binance.staking_service import (
    ListStakingProductsService,
    PurchaseStakingProductService,
    GetStakingPersonalLeftQuotaService,
    GetStakingProductPositionService,
    GetStakingHistoryService,
    GetStakingLeftDailyPurchaseQuotaService,
)

__all__ = [
    "BinanceRestClient",
    "RateLimitTracker",
    "RateLimitError",
    "BinanceApiError",
    "StakingDecodeError",
    "Request",
    "RequestOptions",
    "RequestParams",
    "ListStakingProductsService",
    "PurchaseStakingProductService",
    "GetStakingPersonalLeftQuotaService",
    "GetStakingProductPositionService",
    "GetStakingHistoryService",
    "GetStakingLeftDailyPurchaseQuotaService",
]
