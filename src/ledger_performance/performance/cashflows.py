"""Cash-flow projection of ledger events for the rate solver."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, assert_never

from ledger_performance.events import CashEvent, DividendEvent, FeeEvent, TradeEvent
from ledger_performance.performance._models import CashFlow

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ledger_performance.events import LedgerEvent


def event_cash_flow(event: LedgerEvent) -> CashFlow:
    """
    Map one event to a signed cash flow from the investor's point of view.

    - CASH_IN: -amount (capital leaves the investor into the account)
    - CASH_OUT: +amount
    - TRADE_BUY: -(amount + fee)
    - TRADE_SELL: +amount (sell amounts are already net of fees upstream)
    - DIVIDEND: +amount
    - FEE: -amount
    """
    match event:
        case CashEvent():
            amount = -event.amount if event.is_deposit else event.amount
        case TradeEvent():
            amount = -(event.amount + event.fee_or_zero) if event.is_buy else event.amount
        case DividendEvent():
            amount = event.amount
        case FeeEvent():
            amount = -event.amount
        case _:
            assert_never(event)
    return CashFlow(date=event.date, amount=amount)


def derive_cash_flows(
    events: Iterable[LedgerEvent],
    terminal_value: float,
    terminal_date: date | None = None,
) -> list[CashFlow]:
    """
    Project ledger events into dated cash flows for XIRR.

    One flow per event, in input order. When `terminal_value` is positive, a final
    inflow dated `terminal_date` (default today) stands in for liquidating all open
    holdings at market value, which closes the position for the rate calculation.
    """
    cash_flows = [event_cash_flow(event) for event in events]
    if terminal_value > 0:
        cash_flows.append(
            CashFlow(date=terminal_date or date.today(), amount=terminal_value)
        )
    return cash_flows


def filter_events_by_account(
    events: Iterable[LedgerEvent], account_id: str
) -> list[LedgerEvent]:
    """Return the events booked on `account_id`, preserving order."""
    return [event for event in events if event.account_id == account_id]
