"""Private MEXC account endpoints."""

from __future__ import annotations

from decimal import Decimal

from mexc_trader.config import Settings
from mexc_trader.errors import AccountDataError, AuthError, TransportError
from mexc_trader.exchange.parsing import envelope_failure, parse_available_balance
from mexc_trader.exchange.signer import Signer
from mexc_trader.exchange.transport import HttpTransport, Transport
from mexc_trader.types import Clock
from mexc_trader.utils.clock import utc_millis
from mexc_trader.utils.logging import get_logger

ASSETS_PATH = "/api/v1/private/account/assets"

# Exchange codes for unknown key, expired key, IP not whitelisted, bad signature.
AUTH_ERROR_CODES = frozenset({401, 402, 406, 602})
_AUTH_HTTP_STATUSES = frozenset({401, 403})


class AccountClient:
    """Signed client for account reads; also owns the auth headers."""

    def __init__(
        self,
        settings: Settings,
        signer: Signer,
        transport: Transport | None = None,
        *,
        clock: Clock = utc_millis,
    ) -> None:
        self._settings = settings
        self._signer = signer
        self._clock = clock
        self._transport = transport or HttpTransport(
            settings.mexc_base_url, timeout=settings.http_timeout
        )
        self._logger = get_logger("mexc_trader.exchange.account")

    @property
    def transport(self) -> Transport:
        return self._transport

    def signed_headers(self, method: str, path: str, body: str = "") -> dict[str, str]:
        """Build ApiKey/Request-Time/Signature headers for one request."""
        if not self._settings.mexc_api_key:
            raise AuthError("missing_api_key")
        signed = self._signer.sign_request(method, path, self._clock(), body)
        return {
            "ApiKey": self._settings.mexc_api_key,
            "Request-Time": str(signed.timestamp),
            "Signature": signed.signature,
        }

    def get_available_balance(self, currency: str) -> Decimal:
        """Return the available (non-margined) balance for ``currency``."""
        headers = self.signed_headers("GET", ASSETS_PATH)
        try:
            payload = self._transport.get(ASSETS_PATH, headers=headers)
        except TransportError as exc:
            if exc.status_code in _AUTH_HTTP_STATUSES:
                raise AuthError(f"credentials_rejected: http {exc.status_code}") from exc
            raise AccountDataError(f"assets_request_failed: {exc}") from exc

        code = envelope_failure(payload)
        if code is not None:
            message = payload.get("message", "") if isinstance(payload, dict) else ""
            if code in AUTH_ERROR_CODES:
                raise AuthError(f"credentials_rejected: code={code} {message}".rstrip())
            raise AccountDataError(f"assets_request_rejected: code={code} {message}".rstrip())

        try:
            balance = parse_available_balance(payload, currency)
        except (ValueError, LookupError) as exc:
            raise AccountDataError(str(exc)) from exc

        self._logger.info("balance_fetched", currency=currency, available=str(balance))
        return balance
