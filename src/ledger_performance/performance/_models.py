"""Derived data models for holdings and portfolio performance.

These are recomputed on every call and never persisted as a source of truth:
- Per-instrument output (Holding)
- Solver input (CashFlow)
- Portfolio-wide output (PortfolioMetrics)
- Data-quality findings (DataQualityWarning)
- Average-cost fold state (PositionState)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date


@dataclass(frozen=True)
class Holding:
    """Open position in one instrument, valued at the supplied current price."""

    isin: str
    ticker: str
    name: str
    quantity: float
    cost_basis: float
    average_cost_per_share: float
    current_price: float
    market_value: float
    unrealized_gain: float
    unrealized_gain_percent: float
    total_dividends_received: float


@dataclass(frozen=True)
class CashFlow:
    """Dated cash flow from the investor's point of view (outflow < 0 < inflow)."""

    date: date
    amount: float


@dataclass(frozen=True)
class PortfolioMetrics:
    """Portfolio-wide totals and money-weighted return."""

    total_invested: float
    total_withdrawn: float
    net_cash_flow: float
    current_value: float
    total_dividends: float
    total_fees: float
    xirr: float | None
    xirr_percent: float | None


class WarningSeverity(str, Enum):
    """Severity of a data-quality warning."""

    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class WarningKind(str, Enum):
    """What a data-quality warning is about."""

    MISSING_FEE = "MISSING_FEE"
    OVERSELL = "OVERSELL"
    UNKNOWN_INSTRUMENT = "UNKNOWN_INSTRUMENT"


@dataclass(frozen=True)
class DataQualityWarning:
    """Something in the ledger that makes derived figures less trustworthy."""

    id: str
    kind: WarningKind
    severity: WarningSeverity
    message: str
    affected_event_ids: tuple[str, ...] = ()
    suggested_fix: str | None = None


@dataclass
class PositionState:
    """Running average-cost state for one instrument.

    `oversold_quantity` accumulates sell quantity that exceeded the holding at the time
    of the sell; that excess is skipped rather than driving `quantity` negative.
    """

    quantity: float = 0.0
    cost_basis: float = 0.0
    oversold_quantity: float = 0.0
    oversell_event_ids: list[str] = field(default_factory=list)

    @property
    def average_cost(self) -> float:
        return self.cost_basis / self.quantity if self.quantity > 0 else 0.0
