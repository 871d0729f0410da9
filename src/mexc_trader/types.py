"""Shared domain types for the single-order pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Literal

# Epoch milliseconds, read at the point of use.
Clock = Callable[[], int]

Step = Literal["config", "price", "balance", "sizing", "order", "submit"]

SIDE_OPEN_LONG = 1
ORDER_TYPE_LIMIT = 1
OPEN_TYPE_ISOLATED = 1
POSITION_MODE_HEDGE = 1


class RunState(str, Enum):
    """Orchestrator states; DONE and FAILED are terminal."""

    START = "start"
    PRICE_FETCHED = "price_fetched"
    BALANCE_FETCHED = "balance_fetched"
    SIZED = "sized"
    ORDER_BUILT = "order_built"
    SUBMITTED = "submitted"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class OrderRequest:
    """One open-long futures order with attached TP/SL levels."""

    symbol: str
    side: int
    order_type: int
    open_type: int
    leverage: int
    position_mode: int
    quantity: Decimal
    price: Decimal
    stop_loss_price: Decimal
    take_profit_price: Decimal
    position_id: int
    external_order_id: str


@dataclass(frozen=True, slots=True)
class SignedRequest:
    """A request plus the signature computed over its canonical form."""

    method: str
    path: str
    timestamp: int
    canonical_body: str
    signature: str


@dataclass(slots=True)
class RunResult:
    """Outcome of one orchestration run."""

    state: RunState = RunState.START
    step: Step | None = None
    error: Exception | None = None
    response: dict[str, Any] | None = None
    order: OrderRequest | None = None
    price: Decimal | None = None
    balance: Decimal | None = None
    quantity: Decimal | None = None
    dry_run: bool = False
    history: list[RunState] = field(default_factory=lambda: [RunState.START])
    elapsed_ms: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.state is RunState.DONE

    def advance(self, state: RunState) -> None:
        self.state = state
        self.history.append(state)
