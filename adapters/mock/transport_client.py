"""
Mock 전송 클라이언트

테스트용 Mock 전송 클라이언트.
ITransportClient Protocol 준수.
"""

import json
from dataclasses import dataclass, field
from typing import Any

from adapters.binance.request import Request, RequestOptions


@dataclass
class MockState:
    """Mock 상태 (메모리 내 저장)"""
    
    # 경로별 응답 바이트 (path -> payload)
    responses: dict[str, bytes] = field(default_factory=dict)
    
    # 실행된 요청 기록 (순서대로)
    calls: list[tuple[Request, RequestOptions | None]] = field(default_factory=list)
    
    # 다음 요청에서 발생시킬 에러
    next_error: Exception | None = None


class MockTransportClient:
    """Mock 전송 클라이언트
    
    ITransportClient Protocol 구현.
    경로별로 등록된 응답을 그대로 반환하고, 받은 요청을 기록한다.
    
    사용 예시:
    ```python
    client = MockTransportClient()
    client.set_json("/sapi/v1/staking/purchase", {"purchaseId": 40607})
    
    purchase_id = await PurchaseStakingProductService(client=client).execute()
    request, options = client.last_call
    ```
    """
    
    def __init__(self, state: MockState | None = None):
        self.state = state or MockState()
    
    # -------------------------------------------------------------------------
    # 상태 조작 메서드 (테스트용)
    # -------------------------------------------------------------------------
    
    def set_response(self, path: str, payload: bytes) -> None:
        """원본 응답 바이트 등록"""
        self.state.responses[path] = payload
    
    def set_json(self, path: str, data: Any) -> None:
        """JSON 응답 등록"""
        self.state.responses[path] = json.dumps(data).encode("utf-8")
    
    def set_fail_next(self, error: Exception) -> None:
        """다음 요청 실패 설정"""
        self.state.next_error = error
    
    @property
    def last_call(self) -> tuple[Request, RequestOptions | None]:
        """마지막으로 실행된 요청"""
        return self.state.calls[-1]
    
    @property
    def call_count(self) -> int:
        return len(self.state.calls)
    
    # -------------------------------------------------------------------------
    # ITransportClient
    # -------------------------------------------------------------------------
    
    async def call_api(
        self,
        request: Request,
        options: RequestOptions | None = None,
    ) -> bytes:
        """요청 기록 후 등록된 응답 반환"""
        self.state.calls.append((request, options))
        
        if self.state.next_error is not None:
            error = self.state.next_error
            self.state.next_error = None
            raise error
        
        return self.state.responses.get(request.path, b"null")
