"""Holdings, portfolio metrics and XIRR derived from the ledger event log.

Pure functions over immutable inputs. No I/O.

Usage:
    from ledger_performance.performance import derive_holdings, derive_portfolio_metrics

    holdings = derive_holdings(events, instruments, current_prices)
    metrics = derive_portfolio_metrics(events, holdings)
"""

from ledger_performance.performance._models import (
    CashFlow,
    DataQualityWarning,
    Holding,
    PortfolioMetrics,
    WarningKind,
    WarningSeverity,
)
from ledger_performance.performance.cashflows import (
    derive_cash_flows,
    event_cash_flow,
    filter_events_by_account,
)
from ledger_performance.performance.holdings import derive_holdings
from ledger_performance.performance.metrics import derive_portfolio_metrics
from ledger_performance.performance.quality import derive_data_quality_warnings
from ledger_performance.performance.xirr import solve, solve_xirr, xnpv

__all__ = [
    "CashFlow",
    "DataQualityWarning",
    "Holding",
    "PortfolioMetrics",
    "WarningKind",
    "WarningSeverity",
    "derive_cash_flows",
    "derive_data_quality_warnings",
    "derive_holdings",
    "derive_portfolio_metrics",
    "event_cash_flow",
    "filter_events_by_account",
    "solve",
    "solve_xirr",
    "xnpv",
]
