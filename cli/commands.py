"""
Staking CLI 명령

secrets.yaml의 API 키로 Staking 엔드포인트 하나를 호출하고
결과를 JSON으로 stdout에 출력한다.
"""

import argparse
import dataclasses
import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any

import httpx

from adapters.binance.rate_limiter import BinanceApiError, RateLimitError, StakingDecodeError
from adapters.binance.rest_client import BinanceRestClient
from adapters.binance.staking_service import (
    GetStakingHistoryService,
    GetStakingLeftDailyPurchaseQuotaService,
    GetStakingPersonalLeftQuotaService,
    GetStakingProductPositionService,
    ListStakingProductsService,
    PurchaseStakingProductService,
)
from adapters.interfaces import ITransportClient
from core.config.loader import SecretsLoadError, get_settings
from core.logging import setup_logging
from core.types import StakingProductType, StakingTxnType

logger = logging.getLogger(__name__)

PRODUCT_CHOICES = [p.value for p in StakingProductType]
TXN_TYPE_CHOICES = [t.value for t in StakingTxnType]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="staking", description="Binance Staking 조회/구매")
    parser.add_argument(
        "--secrets",
        type=Path,
        default=None,
        help="secrets.yaml 경로 (기본: config/secrets.yaml)",
    )
    parser.add_argument("--recv-window", type=int, default=None, help="recvWindow (밀리초)")
    parser.add_argument("--verbose", action="store_true", help="DEBUG 로그 출력")

    sub = parser.add_subparsers(dest="command", required=True)

    products = sub.add_parser("products", help="상품 목록 조회")
    products.add_argument("--product", choices=PRODUCT_CHOICES)
    products.add_argument("--asset")
    products.add_argument("--current", type=int)
    products.add_argument("--size", type=int)

    purchase = sub.add_parser("purchase", help="상품 구매")
    purchase.add_argument("--product", choices=PRODUCT_CHOICES, required=True)
    purchase.add_argument("--product-id", required=True)
    purchase.add_argument("--amount", type=float, required=True)

    left_quota = sub.add_parser("left-quota", help="개인 잔여 한도 조회")
    left_quota.add_argument("--product", choices=PRODUCT_CHOICES, required=True)
    left_quota.add_argument("--product-id", required=True)

    positions = sub.add_parser("positions", help="보유 포지션 조회")
    positions.add_argument("--product", choices=PRODUCT_CHOICES)
    positions.add_argument("--product-id")
    positions.add_argument("--asset")
    positions.add_argument("--current", type=int)
    positions.add_argument("--size", type=int)

    history = sub.add_parser("history", help="거래 이력 조회")
    history.add_argument("--product", choices=PRODUCT_CHOICES, required=True)
    history.add_argument("--txn-type", choices=TXN_TYPE_CHOICES, required=True)
    history.add_argument("--asset")
    history.add_argument("--start-time", type=int, help="밀리초 타임스탬프")
    history.add_argument("--end-time", type=int, help="밀리초 타임스탬프")
    history.add_argument("--current", type=int)
    history.add_argument("--size", type=int)

    daily_quota = sub.add_parser("daily-quota", help="일일 잔여 구매 한도 조회")
    daily_quota.add_argument("--product-id", required=True)

    return parser


def build_service(args: argparse.Namespace, client: ITransportClient) -> Any:
    """명령행 인자 -> 설정된 Staking 서비스"""
    if args.command == "products":
        return ListStakingProductsService(
            client=client,
            product=args.product,
            asset=args.asset,
            current=args.current,
            size=args.size,
        )
    if args.command == "purchase":
        return PurchaseStakingProductService(
            client=client,
            product=args.product,
            product_id=args.product_id,
            amount=args.amount,
        )
    if args.command == "left-quota":
        return GetStakingPersonalLeftQuotaService(
            client=client,
            product=args.product,
            product_id=args.product_id,
        )
    if args.command == "positions":
        return GetStakingProductPositionService(
            client=client,
            product=args.product,
            product_id=args.product_id,
            asset=args.asset,
            current=args.current,
            size=args.size,
        )
    if args.command == "history":
        return GetStakingHistoryService(
            client=client,
            product=args.product,
            txn_type=args.txn_type,
            asset=args.asset,
            start_time=args.start_time,
            end_time=args.end_time,
            current=args.current,
            size=args.size,
        )
    if args.command == "daily-quota":
        return GetStakingLeftDailyPurchaseQuotaService(
            client=client,
            product_id=args.product_id,
        )
    raise ValueError(f"unknown command: {args.command}")


def to_jsonable(value: Any) -> Any:
    """결과 모델 -> JSON 직렬화 가능한 값 (Decimal은 문자열)"""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return to_jsonable(dataclasses.asdict(value))
    if isinstance(value, dict):
        return {key: to_jsonable(item) for key, item in value.items()}
    if isinstance(value, list):
        return [to_jsonable(item) for item in value]
    if isinstance(value, Decimal):
        return str(value)
    return value


async def run_command(args: argparse.Namespace, client: ITransportClient) -> Any:
    service = build_service(args, client)
    return await service.execute(recv_window=args.recv_window)


async def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(
        "staking",
        console_level=logging.DEBUG if args.verbose else logging.WARNING,
    )

    try:
        settings = get_settings(args.secrets)
    except (SecretsLoadError, ValueError) as e:
        logger.error(f"설정 로드 실패: {e}")
        return 2

    config = settings.exchange_config
    async with BinanceRestClient(
        api_key=config.api_key,
        api_secret=config.api_secret,
        base_url=config.rest_url,
        timeout=config.timeout,
        max_retries=config.max_retries,
    ) as client:
        try:
            result = await run_command(args, client)
        except (BinanceApiError, RateLimitError, StakingDecodeError, httpx.HTTPError) as e:
            logger.error(f"요청 실패: {e}")
            return 1

    print(json.dumps(to_jsonable(result), indent=2, ensure_ascii=False))
    return 0
