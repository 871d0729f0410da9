"""Blocking JSON transport over httpx."""

from __future__ import annotations

import time
from typing import Any, Mapping, Protocol

import httpx

from mexc_trader.errors import TransportError
from mexc_trader.utils.logging import get_logger, log_http_call

_BODY_PREVIEW_CHARS = 200


class Transport(Protocol):
    """Minimal capability used by the exchange clients."""

    def get(
        self,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any: ...

    def post(
        self,
        path: str,
        *,
        content: str,
        headers: Mapping[str, str] | None = None,
    ) -> Any: ...


class HttpTransport:
    """Send one request per call and return the decoded JSON body."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 5.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._logger = get_logger("mexc_trader.exchange.transport")

    def get(
        self,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return self._request("GET", path, params=params, headers=headers)

    def post(
        self,
        path: str,
        *,
        content: str,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return self._request("POST", path, content=content, headers=headers)

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        content: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        started = time.perf_counter()
        try:
            with httpx.Client(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = client.request(
                    method,
                    path,
                    params=params,
                    content=content,
                    headers=dict(headers or {}),
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            body = exc.response.text[:_BODY_PREVIEW_CHARS]
            self._log(method, path, started, success=False, status_code=status_code)
            raise TransportError(
                f"http_status_{status_code}", status_code=status_code, body=body
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            self._log(method, path, started, success=False, error=type(exc).__name__)
            raise TransportError(f"http_error: {exc}") from exc
        except ValueError as exc:
            self._log(method, path, started, success=False, error="invalid_json")
            raise TransportError("invalid_json_response") from exc

        self._log(method, path, started, success=True, status_code=response.status_code)
        return payload

    def _log(self, method: str, path: str, started: float, *, success: bool, **kwargs: Any) -> None:
        log_http_call(
            self._logger,
            method=method,
            path=path,
            success=success,
            latency_ms=(time.perf_counter() - started) * 1000,
            **kwargs,
        )
