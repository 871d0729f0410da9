from __future__ import annotations

import httpx
import pytest

from mexc_trader.errors import TransportError
from mexc_trader.exchange.transport import HttpTransport

_BASE = "https://contract.example.test"


def _transport(handler) -> HttpTransport:  # type: ignore[no-untyped-def]
    return HttpTransport(_BASE, timeout=1.0, transport=httpx.MockTransport(handler))


def test_get_sends_params_and_decodes_json() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"data": {"lastPrice": 1}})

    payload = _transport(handler).get("/api/v1/contract/ticker", params={"symbol": "BTC_USDT"})

    assert payload == {"data": {"lastPrice": 1}}
    assert seen[0].method == "GET"
    assert seen[0].url.path == "/api/v1/contract/ticker"
    assert seen[0].url.params["symbol"] == "BTC_USDT"


def test_post_sends_body_verbatim() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"success": True})

    _transport(handler).post(
        "/api/v1/private/order/submit",
        content="a=1&b=2",
        headers={"Content-Type": "application/x-www-form-urlencoded", "ApiKey": "k"},
    )

    assert seen[0].content == b"a=1&b=2"
    assert seen[0].headers["ApiKey"] == "k"
    assert seen[0].headers["Content-Type"] == "application/x-www-form-urlencoded"


def test_http_status_error_carries_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="unauthorized")

    with pytest.raises(TransportError) as excinfo:
        _transport(handler).get("/x")
    assert excinfo.value.status_code == 401
    assert excinfo.value.body == "unauthorized"


def test_network_error_wrapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(TransportError) as excinfo:
        _transport(handler).get("/x")
    assert excinfo.value.status_code is None


def test_invalid_json_wrapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>")

    with pytest.raises(TransportError, match="invalid_json_response"):
        _transport(handler).get("/x")


def test_invalid_base_url_wrapped() -> None:
    transport = HttpTransport("https://exa mple.com:abc", timeout=1.0)
    with pytest.raises(TransportError) as excinfo:
        transport.get("/api/v1/contract/ticker")
    assert isinstance(excinfo.value.__cause__, httpx.InvalidURL)
