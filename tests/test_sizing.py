from __future__ import annotations

from decimal import Decimal

import pytest

from mexc_trader.errors import SizingError
from mexc_trader.trading.sizing import PositionSizer


def test_compute_quantity_truncates() -> None:
    qty = PositionSizer().compute_quantity(Decimal("1000"), Decimal("50000"), 3)
    assert qty == Decimal("0.020")
    assert str(qty) == "0.020"


def test_compute_quantity_never_rounds_up() -> None:
    # 1000 / 30000 = 0.03333...; 999.99 / 50000 = 0.0199998
    sizer = PositionSizer()
    assert sizer.compute_quantity(Decimal("1000"), Decimal("30000")) == Decimal("0.033")
    assert sizer.compute_quantity(Decimal("999.99"), Decimal("50000")) == Decimal("0.019")


def test_compute_quantity_respects_rounding_decimals() -> None:
    sizer = PositionSizer()
    assert sizer.compute_quantity(Decimal("1000"), Decimal("3"), 0) == Decimal("333")
    assert sizer.compute_quantity(Decimal("1"), Decimal("3"), 5) == Decimal("0.33333")


@pytest.mark.parametrize(
    ("balance", "price"),
    [
        (Decimal("0"), Decimal("50000")),
        (Decimal("-5"), Decimal("50000")),
        (Decimal("1000"), Decimal("0")),
        (Decimal("1000"), Decimal("-1")),
        (Decimal("NaN"), Decimal("50000")),
        (Decimal("1000"), Decimal("Infinity")),
    ],
)
def test_compute_quantity_rejects_non_positive_inputs(balance: Decimal, price: Decimal) -> None:
    with pytest.raises(SizingError):
        PositionSizer().compute_quantity(balance, price, 3)


def test_compute_quantity_below_minimum_lot() -> None:
    with pytest.raises(SizingError, match="quantity_below_minimum_lot"):
        PositionSizer().compute_quantity(Decimal("10"), Decimal("50000"), 3)


def test_compute_quantity_rejects_negative_decimals() -> None:
    with pytest.raises(SizingError):
        PositionSizer().compute_quantity(Decimal("1000"), Decimal("50000"), -1)


@pytest.mark.parametrize(
    ("balance", "price"),
    [
        (Decimal("1E+27"), Decimal("0.001")),
        (Decimal("1000"), Decimal("1E-30")),
    ],
)
def test_compute_quantity_beyond_decimal_precision(balance: Decimal, price: Decimal) -> None:
    with pytest.raises(SizingError, match="quantity_exceeds_decimal_precision"):
        PositionSizer().compute_quantity(balance, price, 3)
