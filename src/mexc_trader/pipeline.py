"""Single-run order pipeline: price -> balance -> size -> build -> submit."""

from __future__ import annotations

from time import perf_counter
from typing import Callable, TypeVar

from mexc_trader.config import Settings
from mexc_trader.errors import ConfigurationError, TraderError
from mexc_trader.exchange.account import AccountClient
from mexc_trader.exchange.market_data import MarketDataClient
from mexc_trader.exchange.orders import OrderSubmitter
from mexc_trader.exchange.signer import Signer
from mexc_trader.exchange.transport import HttpTransport, Transport
from mexc_trader.trading.orders import OrderBuilder
from mexc_trader.trading.sizing import PositionSizer
from mexc_trader.types import Clock, RunResult, RunState, Step
from mexc_trader.utils.clock import utc_millis
from mexc_trader.utils.logging import get_logger, log_step_failure

T = TypeVar("T")


class _StepFailed(Exception):
    """Internal signal that the run already transitioned to FAILED."""


class Orchestrator:
    """Sequence the components into at most one order attempt."""

    def __init__(
        self,
        settings: Settings,
        *,
        market_data: MarketDataClient,
        account: AccountClient,
        sizer: PositionSizer,
        builder: OrderBuilder,
        submitter: OrderSubmitter,
        dry_run: bool = False,
    ) -> None:
        self._settings = settings
        self._market_data = market_data
        self._account = account
        self._sizer = sizer
        self._builder = builder
        self._submitter = submitter
        self._dry_run = dry_run
        self._logger = get_logger("mexc_trader.pipeline")

    def run(self) -> RunResult:
        """Run every step once; the first typed failure ends the run."""
        settings = self._settings
        started = perf_counter()
        result = RunResult(dry_run=self._dry_run)
        self._logger.info(
            "run_started",
            symbol=settings.symbol,
            leverage=settings.leverage,
            dry_run=self._dry_run,
        )

        try:
            result.price = self._step(
                result, "price", lambda: self._market_data.get_last_price(settings.symbol)
            )
            result.advance(RunState.PRICE_FETCHED)

            result.balance = self._step(
                result,
                "balance",
                lambda: self._account.get_available_balance(settings.collateral_currency),
            )
            result.advance(RunState.BALANCE_FETCHED)

            price, balance = result.price, result.balance
            result.quantity = self._step(
                result,
                "sizing",
                lambda: self._sizer.compute_quantity(balance, price, settings.quantity_decimals),
            )
            result.advance(RunState.SIZED)
            self._logger.info("position_sized", quantity=str(result.quantity), price=str(price))

            quantity = result.quantity
            result.order = self._step(
                result,
                "order",
                lambda: self._builder.build_order(
                    settings.symbol,
                    price,
                    quantity,
                    settings.leverage,
                    settings.take_profit_ratio,
                    settings.stop_loss_ratio,
                ),
            )
            result.advance(RunState.ORDER_BUILT)

            if self._dry_run:
                self._logger.info(
                    "dry_run_order_not_submitted",
                    body=self._builder.serialize(result.order),
                )
                return _finish(result, started, RunState.DONE)

            order = result.order
            result.response = self._step(result, "submit", lambda: self._submitter.submit(order))
            result.advance(RunState.SUBMITTED)
        except _StepFailed:
            return _finish(result, started, RunState.FAILED)

        return _finish(result, started, RunState.DONE)

    def _step(self, result: RunResult, step: Step, action: Callable[[], T]) -> T:
        try:
            return action()
        except TraderError as exc:
            result.step = step
            result.error = exc
            log_step_failure(self._logger, step=step, error=exc, state=result.state.value)
            raise _StepFailed(step) from exc


def run_once(
    settings: Settings,
    *,
    dry_run: bool = False,
    transport: Transport | None = None,
    clock: Clock = utc_millis,
) -> RunResult:
    """Build the components from ``settings`` and run one order attempt.

    Missing credentials end the run at the ``config`` step before any
    network call is made.
    """
    logger = get_logger("mexc_trader.pipeline")
    started = perf_counter()

    try:
        missing = settings.validate_credentials()
        if missing:
            raise ConfigurationError(f"missing_credentials: {', '.join(missing)}")
        signer = Signer(settings.mexc_api_secret)
    except ConfigurationError as exc:
        result = RunResult(dry_run=dry_run, step="config", error=exc)
        log_step_failure(logger, step="config", error=exc)
        return _finish(result, started, RunState.FAILED)

    transport = transport or HttpTransport(settings.mexc_base_url, timeout=settings.http_timeout)
    account = AccountClient(settings, signer, transport, clock=clock)
    builder = OrderBuilder(settings, clock=clock)
    orchestrator = Orchestrator(
        settings,
        market_data=MarketDataClient(settings, transport),
        account=account,
        sizer=PositionSizer(),
        builder=builder,
        submitter=OrderSubmitter(account, builder),
        dry_run=dry_run,
    )
    return orchestrator.run()


def _finish(result: RunResult, started: float, state: RunState) -> RunResult:
    result.advance(state)
    result.elapsed_ms = (perf_counter() - started) * 1000
    get_logger("mexc_trader.pipeline").info(
        "run_finished",
        state=state.value,
        step=result.step,
        elapsed_ms=round(result.elapsed_ms, 2),
    )
    return result
