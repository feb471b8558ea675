"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
모든 구현체는 이 Protocol을 준수해야 함.
"""

from typing import Protocol, runtime_checkable

from adapters.binance.request import Request, RequestOptions


@runtime_checkable
class ITransportClient(Protocol):
    """서명 HTTP 전송 클라이언트 인터페이스

    Endpoint 서비스가 의존하는 유일한 외부 협력자.
    인증 헤더/서명 부착, 요청 실행, Rate Limit/재시도 정책은 구현체 책임.
    """

    async def call_api(
        self,
        request: Request,
        options: RequestOptions | None = None,
    ) -> bytes:
        """요청 실행

        Args:
            request: 요청 기술자
            options: 요청 단위 오버라이드

        Returns:
            원본 응답 바이트

        Raises:
            BinanceApiError: API 에러 응답 시
            RateLimitError: Rate Limit 초과 시
            httpx.RequestError: 네트워크 실패 시
        """
        ...
