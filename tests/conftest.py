from __future__ import annotations

from typing import Any, Mapping

import pytest

from mexc_trader.config import Settings
from mexc_trader.errors import TransportError

TICKER_OK = {"success": True, "code": 0, "data": {"symbol": "BTC_USDT", "lastPrice": 50000}}
ASSETS_OK = {
    "success": True,
    "code": 0,
    "data": [
        {"currency": "BTC", "availableBalance": 0.5},
        {"currency": "USDT", "availableBalance": 1000, "equity": 1200},
    ],
}
SUBMIT_OK = {"success": True, "code": 0, "data": "739113577038255616"}

FIXED_MS = 1_700_000_000_000


class FakeTransport:
    """Records every call; answers from a path -> response (or exception) map."""

    def __init__(self, responses: Mapping[str, Any]) -> None:
        self._responses = dict(responses)
        self.calls: list[dict[str, Any]] = []

    def get(
        self,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return self._answer({"method": "GET", "path": path, "params": params, "headers": headers})

    def post(
        self,
        path: str,
        *,
        content: str,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return self._answer({"method": "POST", "path": path, "content": content, "headers": headers})

    def paths(self, method: str | None = None) -> list[str]:
        return [c["path"] for c in self.calls if method is None or c["method"] == method]

    def _answer(self, call: dict[str, Any]) -> Any:
        self.calls.append(call)
        response = self._responses.get(call["path"])
        if response is None:
            raise TransportError(f"no_fake_response: {call['path']}")
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        mexc_api_key="test-key",
        mexc_api_secret="test-secret",
        mexc_base_url="https://contract.example.test/",
    )


@pytest.fixture
def fixed_clock() -> Any:
    return lambda: FIXED_MS
