"""Signed order submission."""

from __future__ import annotations

from typing import Any

from mexc_trader.errors import SubmissionError, TransportError
from mexc_trader.exchange.account import AccountClient
from mexc_trader.trading.orders import OrderBuilder
from mexc_trader.types import OrderRequest
from mexc_trader.utils.logging import get_logger, log_order_execution

SUBMIT_PATH = "/api/v1/private/order/submit"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class OrderSubmitter:
    """POST one order; the exchange's answer is returned uninterpreted."""

    def __init__(self, account: AccountClient, builder: OrderBuilder) -> None:
        self._account = account
        self._builder = builder
        self._logger = get_logger("mexc_trader.exchange.orders")

    def submit(self, order: OrderRequest) -> dict[str, Any]:
        """Serialize, sign and send ``order`` exactly once."""
        body = self._builder.serialize(order)
        headers = self._account.signed_headers("POST", SUBMIT_PATH, body)
        headers["Content-Type"] = FORM_CONTENT_TYPE

        try:
            response = self._account.transport.post(SUBMIT_PATH, content=body, headers=headers)
        except TransportError as exc:
            log_order_execution(
                self._logger,
                symbol=order.symbol,
                side="open_long",
                quantity=order.quantity,
                price=order.price,
                order_id=order.external_order_id,
                status="failed",
                error=str(exc),
            )
            raise SubmissionError(f"order_submit_failed: {exc}") from exc

        if not isinstance(response, dict):
            raise SubmissionError(f"order_response_not_object: {type(response).__name__}")

        log_order_execution(
            self._logger,
            symbol=order.symbol,
            side="open_long",
            quantity=order.quantity,
            price=order.price,
            order_id=order.external_order_id,
            status="answered",
            exchange_success=response.get("success"),
            exchange_code=response.get("code"),
        )
        return response
