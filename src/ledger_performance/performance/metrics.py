"""Portfolio-wide metrics: capital totals and money-weighted return."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, assert_never

from ledger_performance.events import CashEvent, DividendEvent, FeeEvent, TradeEvent
from ledger_performance.performance._models import PortfolioMetrics
from ledger_performance.performance.cashflows import derive_cash_flows
from ledger_performance.performance.xirr import solve_xirr

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import date

    from ledger_performance.config import SolverConfig
    from ledger_performance.events import LedgerEvent
    from ledger_performance.performance._models import Holding


def derive_portfolio_metrics(
    events: Iterable[LedgerEvent],
    holdings: Sequence[Holding],
    as_of: date | None = None,
    *,
    config: SolverConfig | None = None,
) -> PortfolioMetrics:
    """
    Compute portfolio totals and XIRR over the full event history.

    Totals:
    - total_invested: sum of CASH_IN
    - total_withdrawn: sum of CASH_OUT
    - total_dividends: sum of DIVIDEND
    - total_fees: standalone FEE amounts plus every trade `fee`
    - current_value: sum of the holdings' market values

    XIRR is solved over `derive_cash_flows(events, current_value, as_of)`. When the
    solver cannot produce a rate, `xirr` and `xirr_percent` are None.

    Args:
        events: Ledger events in any order.
        holdings: Output of `derive_holdings` for the same events.
        as_of: Valuation date for the terminal flow (defaults to today).
        config: XIRR solver parameters (defaults to `DEFAULT_SOLVER_CONFIG`).
    """
    events = list(events)
    invested: list[float] = []
    withdrawn: list[float] = []
    dividends: list[float] = []
    fees: list[float] = []

    for event in events:
        match event:
            case CashEvent():
                (invested if event.is_deposit else withdrawn).append(event.amount)
            case DividendEvent():
                dividends.append(event.amount)
            case FeeEvent():
                fees.append(event.amount)
            case TradeEvent():
                if event.fee:
                    fees.append(event.fee)
            case _:
                assert_never(event)

    total_invested = math.fsum(invested)
    total_withdrawn = math.fsum(withdrawn)
    current_value = math.fsum(holding.market_value for holding in holdings)

    xirr = solve_xirr(derive_cash_flows(events, current_value, as_of), config=config)

    return PortfolioMetrics(
        total_invested=total_invested,
        total_withdrawn=total_withdrawn,
        net_cash_flow=total_invested - total_withdrawn,
        current_value=current_value,
        total_dividends=math.fsum(dividends),
        total_fees=math.fsum(fees),
        xirr=xirr,
        xirr_percent=xirr * 100 if xirr is not None else None,
    )
