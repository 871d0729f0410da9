"""Order payload construction and canonical form-body serialization."""

from __future__ import annotations

import secrets
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from mexc_trader.config import Settings
from mexc_trader.errors import ValidationError
from mexc_trader.trading.sizing import quantum
from mexc_trader.types import (
    OPEN_TYPE_ISOLATED,
    ORDER_TYPE_LIMIT,
    POSITION_MODE_HEDGE,
    SIDE_OPEN_LONG,
    Clock,
    OrderRequest,
)
from mexc_trader.utils.clock import utc_millis
from mexc_trader.utils.logging import get_logger

# OrderRequest attribute -> key the exchange signs over. Changing either side
# changes the canonical body and invalidates the signature.
WIRE_KEYS: dict[str, str] = {
    "symbol": "symbol",
    "side": "side",
    "order_type": "type",
    "open_type": "open_type",
    "leverage": "leverage",
    "position_mode": "position_mode",
    "quantity": "vol",
    "price": "price",
    "stop_loss_price": "stop_loss_price",
    "take_profit_price": "take_profit_price",
    "position_id": "position_id",
    "external_order_id": "external_oid",
}


def round_to_tick(value: Decimal, tick: Decimal) -> Decimal:
    """Round ``value`` to the nearest multiple of ``tick`` (half up)."""
    if tick <= 0:
        raise ValidationError(f"invalid_price_tick: {tick}")
    exponent = tick.normalize().as_tuple().exponent
    places = -exponent if isinstance(exponent, int) and exponent < 0 else 0
    try:
        steps = (value / tick).to_integral_value(rounding=ROUND_HALF_UP)
        return (steps * tick).quantize(quantum(places))
    except InvalidOperation as exc:
        raise ValidationError(f"price_exceeds_decimal_precision: {value} tick={tick}") from exc


def format_decimal(value: Decimal) -> str:
    """Render without exponent notation, keeping trailing zeros."""
    return format(value, "f")


def parse_body(body: str) -> dict[str, str]:
    """Split a canonical ``key=value&...`` body back into a mapping."""
    if not body:
        return {}
    pairs = (item.split("=", 1) for item in body.split("&"))
    return {key: value for key, value in pairs}


class OrderBuilder:
    """Build open-long orders with TP/SL levels and serialize them for signing."""

    def __init__(self, settings: Settings, *, clock: Clock = utc_millis) -> None:
        self._settings = settings
        self._clock = clock
        self._logger = get_logger("mexc_trader.trading.orders")

    def build_order(
        self,
        symbol: str,
        price: Decimal,
        quantity: Decimal,
        leverage: int,
        tp_ratio: Decimal,
        sl_ratio: Decimal,
    ) -> OrderRequest:
        """Derive TP/SL from ``price`` and assemble an ``OrderRequest``."""
        self._validate(symbol, price, quantity, leverage, tp_ratio, sl_ratio)

        tick = self._settings.price_tick
        entry = round_to_tick(price, tick)
        take_profit = round_to_tick(price * (1 + tp_ratio), tick)
        stop_loss = round_to_tick(price * (1 - sl_ratio), tick)
        if not stop_loss < entry < take_profit:
            raise ValidationError(
                f"risk_levels_collapsed_at_tick: sl={stop_loss} price={entry} tp={take_profit}"
            )

        order = OrderRequest(
            symbol=symbol,
            side=SIDE_OPEN_LONG,
            order_type=ORDER_TYPE_LIMIT,
            open_type=OPEN_TYPE_ISOLATED,
            leverage=int(leverage),
            position_mode=POSITION_MODE_HEDGE,
            quantity=quantity,
            price=entry,
            stop_loss_price=stop_loss,
            take_profit_price=take_profit,
            position_id=0,
            external_order_id=self._next_external_id(),
        )
        self._logger.info(
            "order_built",
            symbol=symbol,
            quantity=str(quantity),
            price=str(entry),
            take_profit=str(take_profit),
            stop_loss=str(stop_loss),
            external_oid=order.external_order_id,
        )
        return order

    def serialize(self, order: OrderRequest) -> str:
        """Return the canonical body: wire keys sorted, joined by ``&``."""
        fields = {WIRE_KEYS[name]: self._render(name, getattr(order, name)) for name in WIRE_KEYS}
        return "&".join(f"{key}={fields[key]}" for key in sorted(fields))

    def _render(self, name: str, value: object) -> str:
        if name == "quantity":
            digits = quantum(self._settings.quantity_decimals)
            return format_decimal(Decimal(value).quantize(digits))  # type: ignore[arg-type]
        if isinstance(value, Decimal):
            return format_decimal(value)
        return str(value)

    def _next_external_id(self) -> str:
        return f"{self._settings.external_oid_prefix}-{self._clock()}-{secrets.token_hex(3)}"

    def _validate(
        self,
        symbol: str,
        price: Decimal,
        quantity: Decimal,
        leverage: int,
        tp_ratio: Decimal,
        sl_ratio: Decimal,
    ) -> None:
        if not symbol:
            raise ValidationError("symbol_required")
        if isinstance(leverage, bool) or not 1 <= leverage <= self._settings.max_leverage:
            raise ValidationError(
                f"leverage_out_of_bounds: {leverage} not in [1, {self._settings.max_leverage}]"
            )
        if not tp_ratio > 0 or not sl_ratio > 0:
            raise ValidationError(f"tp_sl_ratios_must_be_positive: tp={tp_ratio} sl={sl_ratio}")
        if sl_ratio >= 1:
            raise ValidationError(f"stop_loss_ratio_too_large: {sl_ratio}")
        if not price.is_finite() or price <= 0:
            raise ValidationError(f"price_not_positive: {price}")
        if not quantity.is_finite() or quantity <= 0:
            raise ValidationError(f"quantity_not_positive: {quantity}")
