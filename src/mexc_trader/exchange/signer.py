"""HMAC-SHA256 request signing for MEXC private endpoints."""

from __future__ import annotations

import hashlib
import hmac

from pydantic import SecretStr

from mexc_trader.errors import ConfigurationError
from mexc_trader.types import SignedRequest


class Signer:
    """Deterministic request signer keyed by the account secret."""

    def __init__(self, secret: SecretStr | str) -> None:
        raw = secret.get_secret_value() if isinstance(secret, SecretStr) else secret
        if not raw:
            raise ConfigurationError("missing_api_secret")
        self._key = raw.encode("utf-8")

    def __repr__(self) -> str:
        return "Signer(secret='**********')"

    @staticmethod
    def prehash(method: str, path: str, timestamp_ms: int, canonical_body: str = "") -> str:
        """Concatenate method, path, timestamp and body in signing order."""
        return f"{method}{path}{timestamp_ms}{canonical_body or ''}"

    def sign(self, method: str, path: str, timestamp_ms: int, canonical_body: str = "") -> str:
        """Return the lower-case hex signature of the canonical request."""
        message = self.prehash(method, path, timestamp_ms, canonical_body)
        return hmac.new(self._key, message.encode("utf-8"), hashlib.sha256).hexdigest()

    def sign_request(
        self,
        method: str,
        path: str,
        timestamp_ms: int,
        canonical_body: str = "",
    ) -> SignedRequest:
        return SignedRequest(
            method=method,
            path=path,
            timestamp=timestamp_ms,
            canonical_body=canonical_body,
            signature=self.sign(method, path, timestamp_ms, canonical_body),
        )
