"""Response adapters for MEXC contract payloads.

The exchange spells some fields in camelCase on newer API versions and in
snake_case on older ones. Each adapter below lists its candidate keys in
fallback order; the first candidate that parses is used.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Sequence

LAST_PRICE_KEYS = ("lastPrice", "last_price")
AVAILABLE_BALANCE_KEYS = ("availableBalance", "available_balance")


def to_decimal(value: Any) -> Decimal | None:
    """Parse a JSON scalar into a finite Decimal, or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not parsed.is_finite():
        return None
    return parsed


def pick_decimal(
    record: Mapping[str, Any],
    keys: Sequence[str],
    *,
    allow_zero: bool = False,
) -> Decimal | None:
    """Return the first candidate key holding a finite positive decimal."""
    for key in keys:
        parsed = to_decimal(record.get(key))
        if parsed is None:
            continue
        if parsed > 0 or (allow_zero and parsed == 0):
            return parsed
    return None


def unwrap_data(payload: Any) -> Any:
    """Return the ``data`` member of a response envelope."""
    if not isinstance(payload, dict):
        raise ValueError("response_not_object")
    if "data" not in payload:
        raise ValueError("response_missing_data")
    return payload["data"]


def envelope_failure(payload: Any) -> int | None:
    """Return the exchange error code when the envelope reports failure."""
    if not isinstance(payload, dict) or payload.get("success", True) is not False:
        return None
    code = payload.get("code")
    try:
        return int(code)
    except (TypeError, ValueError):
        return -1


def parse_last_price(payload: Any) -> Decimal:
    """Extract the last traded price from a ticker response."""
    data = unwrap_data(payload)
    if not isinstance(data, dict):
        raise ValueError("ticker_data_not_object")
    price = pick_decimal(data, LAST_PRICE_KEYS)
    if price is None:
        raise ValueError("ticker_missing_last_price")
    return price


def parse_available_balance(payload: Any, currency: str) -> Decimal:
    """Extract the available balance for ``currency`` from an assets response."""
    data = unwrap_data(payload)
    if not isinstance(data, list):
        raise ValueError("assets_data_not_list")
    for record in data:
        if isinstance(record, dict) and record.get("currency") == currency:
            balance = pick_decimal(record, AVAILABLE_BALANCE_KEYS, allow_zero=True)
            if balance is None:
                raise ValueError(f"unparseable_available_balance: {currency}")
            return balance
    raise LookupError(f"currency_not_found: {currency}")
