"""Balance-driven position sizing."""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal, InvalidOperation

from mexc_trader.errors import SizingError

DEFAULT_QUANTITY_DECIMALS = 3


def quantum(decimals: int) -> Decimal:
    """Smallest step representable with ``decimals`` fractional digits."""
    return Decimal(1).scaleb(-decimals) if decimals > 0 else Decimal(1)


class PositionSizer:
    """Convert available collateral into an order quantity."""

    def compute_quantity(
        self,
        balance: Decimal,
        price: Decimal,
        rounding_decimals: int = DEFAULT_QUANTITY_DECIMALS,
    ) -> Decimal:
        """Return ``balance / price`` truncated to ``rounding_decimals`` digits.

        Truncation never allocates more collateral than is available. A result
        that truncates to zero is below the minimum lot and is rejected.
        """
        balance = Decimal(balance)
        price = Decimal(price)
        if not balance.is_finite() or balance <= 0:
            raise SizingError(f"balance_not_positive: {balance}")
        if not price.is_finite() or price <= 0:
            raise SizingError(f"price_not_positive: {price}")
        if rounding_decimals < 0:
            raise SizingError(f"invalid_rounding_decimals: {rounding_decimals}")

        try:
            qty = (balance / price).quantize(quantum(rounding_decimals), rounding=ROUND_DOWN)
        except InvalidOperation as exc:
            raise SizingError(
                f"quantity_exceeds_decimal_precision: balance={balance} price={price}"
            ) from exc
        if qty <= 0:
            raise SizingError(f"quantity_below_minimum_lot: balance={balance} price={price}")
        return qty
