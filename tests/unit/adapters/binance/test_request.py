"""
요청 기술자 / 파라미터 빌더 테스트
"""

import pytest

from adapters.binance.request import Request, RequestOptions, RequestParams
from core.types import SecurityType


class TestRequestParams:
    """RequestParams 테스트"""

    def test_optional_none_is_omitted(self) -> None:
        """미설정 선택 파라미터는 키 자체가 없음"""
        params = RequestParams().set_optional("asset", None).to_dict()

        assert "asset" not in params
        assert params == {}

    def test_optional_zero_is_kept(self) -> None:
        """0/빈 문자열도 명시하면 포함"""
        params = (
            RequestParams()
            .set_optional("current", 0)
            .set_optional("asset", "")
            .to_dict()
        )

        assert params == {"current": 0, "asset": ""}

    def test_required_always_kept(self) -> None:
        params = (
            RequestParams()
            .set_required("product", "")
            .set_required("amount", 0.0)
            .to_dict()
        )

        assert params == {"product": "", "amount": 0.0}

    def test_insertion_order(self) -> None:
        params = (
            RequestParams()
            .set_required("b", 1)
            .set_optional("a", 2)
            .set_required("c", 3)
        )

        assert list(params.to_dict()) == ["b", "a", "c"]
        assert len(params) == 3
        assert "a" in params

    def test_to_dict_returns_copy(self) -> None:
        params = RequestParams().set_required("a", 1)

        rendered = params.to_dict()
        rendered["b"] = 2

        assert "b" not in params


class TestRequest:
    """Request 테스트"""

    def test_defaults(self) -> None:
        request = Request(method="GET", path="/api/v3/time")

        assert request.security == SecurityType.NONE
        assert request.signed is False
        assert request.query == {}
        assert request.encoded_form() == ""

    def test_signed(self) -> None:
        request = Request(method="GET", path="/x", security=SecurityType.SIGNED)

        assert request.signed is True

    def test_encoded_form(self) -> None:
        request = Request(
            method="GET",
            path="/x",
            form={"product": "STAKING", "productId": "Axs*90"},
        )

        assert request.encoded_form() == "product=STAKING&productId=Axs%2A90"

    def test_params_merges_query_and_form(self) -> None:
        request = Request(method="GET", path="/x", query={"a": 1}, form={"b": 2})

        assert request.params == {"a": 1, "b": 2}

    def test_frozen(self) -> None:
        request = Request(method="GET", path="/x")

        with pytest.raises(AttributeError):
            request.path = "/y"  # type: ignore


class TestRequestOptions:
    def test_defaults(self) -> None:
        options = RequestOptions()

        assert options.recv_window is None
        assert options.headers == {}
        assert options.timeout is None
