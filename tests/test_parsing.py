from __future__ import annotations

from decimal import Decimal

import pytest

from mexc_trader.exchange.parsing import (
    envelope_failure,
    parse_available_balance,
    parse_last_price,
    pick_decimal,
    to_decimal,
)


def test_last_price_prefers_camel_case() -> None:
    payload = {"data": {"lastPrice": "50000.5", "last_price": "1"}}
    assert parse_last_price(payload) == Decimal("50000.5")


def test_last_price_falls_back_to_snake_case() -> None:
    assert parse_last_price({"data": {"last_price": 42000}}) == Decimal("42000")


def test_last_price_skips_unusable_camel_case() -> None:
    payload = {"data": {"lastPrice": "NaN", "last_price": "41000"}}
    assert parse_last_price(payload) == Decimal("41000")
    payload = {"data": {"lastPrice": 0, "last_price": "41000"}}
    assert parse_last_price(payload) == Decimal("41000")


@pytest.mark.parametrize(
    "payload",
    [
        None,
        [],
        {"success": True},
        {"data": None},
        {"data": {}},
        {"data": {"lastPrice": "abc"}},
        {"data": {"lastPrice": -1}},
        {"data": {"lastPrice": True}},
    ],
)
def test_last_price_malformed(payload: object) -> None:
    with pytest.raises(ValueError):
        parse_last_price(payload)


def test_available_balance_exact_currency_match() -> None:
    payload = {
        "data": [
            {"currency": "usdt", "availableBalance": 5},
            {"currency": "USDT", "available_balance": "12.5"},
        ]
    }
    assert parse_available_balance(payload, "USDT") == Decimal("12.5")


def test_available_balance_zero_is_allowed() -> None:
    payload = {"data": [{"currency": "USDT", "availableBalance": 0}]}
    assert parse_available_balance(payload, "USDT") == Decimal("0")


def test_available_balance_missing_currency() -> None:
    with pytest.raises(LookupError):
        parse_available_balance({"data": [{"currency": "BTC", "availableBalance": 1}]}, "USDT")


def test_available_balance_unparseable() -> None:
    with pytest.raises(ValueError, match="unparseable_available_balance"):
        parse_available_balance({"data": [{"currency": "USDT", "availableBalance": "x"}]}, "USDT")


def test_to_decimal_and_pick() -> None:
    assert to_decimal(" 1.5 ") == Decimal("1.5")
    assert to_decimal("inf") is None
    assert to_decimal(None) is None
    assert pick_decimal({"a": "-1", "b": "2"}, ("a", "b")) == Decimal("2")


def test_envelope_failure_codes() -> None:
    assert envelope_failure({"success": True, "code": 0}) is None
    assert envelope_failure({"data": []}) is None
    assert envelope_failure({"success": False, "code": 602}) == 602
    assert envelope_failure({"success": False}) == -1
