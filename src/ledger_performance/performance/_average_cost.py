"""Average-cost-basis position fold.

This module groups ledger events per instrument and folds each instrument's trades into
a running (quantity, cost basis) state.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, assert_never

import structlog

from ledger_performance.constants import QUANTITY_EPSILON
from ledger_performance.events import CashEvent, DividendEvent, FeeEvent, TradeEvent
from ledger_performance.performance._models import PositionState

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ledger_performance.events import LedgerEvent

logger = structlog.get_logger()


@dataclass
class InstrumentEvents:
    """Trades and dividends for one ISIN, in the order they were supplied."""

    trades: list[TradeEvent] = field(default_factory=list)
    dividends: list[DividendEvent] = field(default_factory=list)


def group_by_isin(events: Iterable[LedgerEvent]) -> dict[str, InstrumentEvents]:
    """
    Partition trade and dividend events by ISIN.

    Fee and cash events are account-level and are skipped.
    """
    grouped: dict[str, InstrumentEvents] = {}
    for event in events:
        match event:
            case TradeEvent():
                grouped.setdefault(event.isin, InstrumentEvents()).trades.append(event)
            case DividendEvent():
                grouped.setdefault(event.isin, InstrumentEvents()).dividends.append(event)
            case FeeEvent() | CashEvent():
                continue
            case _:
                assert_never(event)
    return grouped


def _quantities_match(a: float, b: float) -> bool:
    return math.isclose(a, b, rel_tol=QUANTITY_EPSILON, abs_tol=QUANTITY_EPSILON)


def _closes_position(sold: float, held: float) -> bool:
    """True when a sell of `sold` leaves nothing of `held` (within float drift)."""
    return sold > held or _quantities_match(sold, held)


def fold_average_cost(trades: Iterable[TradeEvent]) -> PositionState:
    """
    Replay trades for one instrument under average-cost-basis accounting.

    Trades are processed by ascending `date`; same-day trades keep the order they were
    supplied in (stable sort), which matters because average cost is path dependent.

    - A buy adds `amount + fee` to the cost basis and its quantity to the holding.
    - A sell removes `average_cost * sold_quantity` from the cost basis.

    A sell larger than the current holding only consumes what is held. The excess is
    recorded in `oversold_quantity` and the quantity never goes negative.
    Quantities are compared with `QUANTITY_EPSILON`, so a sell that matches the holding
    up to float drift closes it without counting as an oversell.

    Args:
        trades: Trades for a single ISIN, any order.

    Returns:
        Final position state after all trades.
    """
    state = PositionState()

    for trade in sorted(trades, key=lambda t: t.date):
        if trade.is_buy:
            state.quantity += trade.quantity
            state.cost_basis += trade.amount + trade.fee_or_zero
            continue

        if not _closes_position(trade.quantity, state.quantity):
            state.cost_basis -= state.average_cost * trade.quantity
            state.quantity -= trade.quantity
            continue

        excess_qty = trade.quantity - state.quantity
        if excess_qty > 0 and not _quantities_match(trade.quantity, state.quantity):
            state.oversold_quantity += excess_qty
            state.oversell_event_ids.append(trade.id)
            logger.warning(
                "Sell exceeds holding; skipping excess quantity",
                isin=trade.isin,
                event_id=trade.id,
                held=state.quantity,
                sold=trade.quantity,
            )

        # Fully closed: drop any floating-point residue in quantity and cost basis.
        state.quantity = 0.0
        state.cost_basis = 0.0

    return state
