"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class TradingMode(str, Enum):
    """거래 모드 (실거래 / 테스트넷)"""

    PRODUCTION = "production"
    TESTNET = "testnet"


class SecurityType(str, Enum):
    """요청 보안 분류

    NONE: 공개 API
    API_KEY: API 키 헤더만 필요
    SIGNED: API 키 + timestamp + HMAC 서명 필요
    """

    NONE = "NONE"
    API_KEY = "API_KEY"
    SIGNED = "SIGNED"


class StakingProductType(str, Enum):
    """Staking 상품 유형"""

    STAKING = "STAKING"  # Locked Staking
    F_DEFI = "F_DEFI"  # Flexible DeFi Staking
    L_DEFI = "L_DEFI"  # Locked DeFi Staking


class StakingTxnType(str, Enum):
    """Staking 거래 유형 (history 조회용)"""

    SUBSCRIPTION = "SUBSCRIPTION"
    REDEMPTION = "REDEMPTION"
    INTEREST = "INTEREST"


def enum_value(value: "str | Enum") -> str:
    """Enum 또는 문자열을 API 전송용 문자열로 변환"""
    return value.value if isinstance(value, Enum) else value
