"""Typed failures raised by the order-execution pipeline."""

from __future__ import annotations


class TraderError(Exception):
    """Base error for every pipeline failure."""


class ConfigurationError(TraderError):
    """Raised when credentials or static configuration are unusable."""


class TransportError(TraderError):
    """Raised when an HTTP call fails to reach the exchange or to decode."""

    def __init__(self, message: str, *, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class MarketDataError(TraderError):
    """Raised when no usable last price is available."""


class AuthError(TraderError):
    """Raised when the exchange rejects or cannot receive our credentials."""


class AccountDataError(TraderError):
    """Raised when the asset listing lacks a usable balance."""


class SizingError(TraderError):
    """Raised when balance and price cannot produce a tradable quantity."""


class ValidationError(TraderError):
    """Raised when order parameters violate exchange or risk constraints."""


class SubmissionError(TraderError):
    """Raised when the order POST fails to reach the exchange or to decode."""
