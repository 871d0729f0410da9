"""Public MEXC contract market data."""

from __future__ import annotations

from decimal import Decimal

from mexc_trader.config import Settings
from mexc_trader.errors import MarketDataError, TransportError
from mexc_trader.exchange.parsing import parse_last_price
from mexc_trader.exchange.transport import HttpTransport, Transport
from mexc_trader.utils.logging import get_logger

TICKER_PATH = "/api/v1/contract/ticker"


class MarketDataClient:
    """Read-only client for the unsigned ticker endpoint."""

    def __init__(self, settings: Settings, transport: Transport | None = None) -> None:
        self._settings = settings
        self._transport = transport or HttpTransport(
            settings.mexc_base_url, timeout=settings.http_timeout
        )
        self._logger = get_logger("mexc_trader.exchange.market_data")

    def get_last_price(self, symbol: str) -> Decimal:
        """Fetch the last traded price for ``symbol``."""
        try:
            payload = self._transport.get(TICKER_PATH, params={"symbol": symbol})
        except TransportError as exc:
            raise MarketDataError(f"ticker_request_failed: {exc}") from exc

        try:
            price = parse_last_price(payload)
        except ValueError as exc:
            raise MarketDataError(f"malformed_ticker: {exc}") from exc

        self._logger.info("price_fetched", symbol=symbol, price=str(price))
        return price
