"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → 프로젝트 루트)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class BinanceEndpoints:
    """Binance API 엔드포인트 (고정값)

    Staking API는 Spot/SAPI 도메인 사용.
    공식 문서: https://binance-docs.github.io/apidocs/spot/en/#staking-endpoints
    """

    # Production (Spot / SAPI)
    PROD_REST_URL: str = "https://api.binance.com"

    # Testnet (Spot)
    TEST_REST_URL: str = "https://testnet.binance.vision"


class StakingPaths:
    """Staking REST 경로"""

    PRODUCT_LIST: str = "/sapi/v1/staking/productList"
    PURCHASE: str = "/sapi/v1/staking/purchase"
    PERSONAL_LEFT_QUOTA: str = "/sapi/v1/staking/personalLeftQuota"
    POSITION: str = "/sapi/v1/staking/position"
    STAKING_RECORD: str = "/sapi/v1/staking/stakingRecord"
    DAILY_LEFT_QUOTA: str = "/sapi/v1/lending/daily/userLeftQuota"

    SERVER_TIME: str = "/api/v3/time"


class Defaults:
    """기본값 상수"""

    REQUEST_TIMEOUT_SEC: float = 30.0
    MAX_RETRIES: int = 3
    RECV_WINDOW_MS: int = 5000


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # 설정 파일
    SECRETS_FILE: Path = CONFIG_DIR / "secrets.yaml"


class RateLimitThresholds:
    """Rate Limit 임계값 (1분 가중치)

    헤더 종류별 한도가 다르므로 임계값도 각각 둔다.
    """

    # /api (Spot): 1분당 6000
    WEIGHT_WARN: int = 4800  # 경고
    WEIGHT_SLOW: int = 5400  # 속도 저하
    WEIGHT_STOP: int = 5900  # 요청 중단

    # /sapi IP 기준: 1분당 12000
    SAPI_IP_WEIGHT_WARN: int = 9600
    SAPI_IP_WEIGHT_SLOW: int = 10800
    SAPI_IP_WEIGHT_STOP: int = 11800

    # /sapi UID 기준: 1분당 180000
    SAPI_UID_WEIGHT_WARN: int = 144000
    SAPI_UID_WEIGHT_SLOW: int = 162000
    SAPI_UID_WEIGHT_STOP: int = 178000

    # 마지막 응답 이후 이 시간(초)이 지나면 가중치를 0으로 간주
    WEIGHT_WINDOW_SEC: int = 60
