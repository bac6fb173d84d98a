"""
Ledger Performance.

Money-weighted return (XIRR) and average-cost holdings derived from an append-only log of
investment events.
"""

__version__ = "0.1.0"

from ledger_performance.events import (
    CashEvent,
    DividendEvent,
    EventSource,
    EventType,
    FeeEvent,
    Instrument,
    LedgerEvent,
    TradeEvent,
    parse_events,
    parse_instruments,
)

# Configure structlog once at import time (quiet by default).
from ledger_performance.logging import configure_structlog
from ledger_performance.performance import (
    derive_cash_flows,
    derive_data_quality_warnings,
    derive_holdings,
    derive_portfolio_metrics,
    solve_xirr,
)

configure_structlog()

__all__ = [
    "CashEvent",
    "DividendEvent",
    "EventSource",
    "EventType",
    "FeeEvent",
    "Instrument",
    "LedgerEvent",
    "TradeEvent",
    "__version__",
    "derive_cash_flows",
    "derive_data_quality_warnings",
    "derive_holdings",
    "derive_portfolio_metrics",
    "parse_events",
    "parse_instruments",
    "solve_xirr",
]
