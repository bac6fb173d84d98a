"""Centralized policy constants for ledger performance calculations.

Named constants for the numeric and display policies shared by the holdings deriver
and the rate solver. Changing any of these changes computed results, so they live in
one place.
"""

from __future__ import annotations

# =============================================================================
# Ledger
# =============================================================================

# Single base currency for every event and instrument.
#
# Used by:
# - events.py: default `currency` on events and instruments
#
# Multi-currency conversion is out of scope; all amounts are in this currency.
BASE_CURRENCY: str = "NOK"

# =============================================================================
# Holdings
# =============================================================================

# Display name used when an ISIN has no instrument record.
#
# Used by:
# - performance/holdings.py: derive_holdings()
UNKNOWN_INSTRUMENT_NAME: str = "Unknown"

# Number of leading ISIN characters used as a synthesized ticker.
#
# Used by:
# - performance/holdings.py: derive_holdings()
#
# "NO0010096985" -> "NO0010"
SYNTHETIC_TICKER_LENGTH: int = 6

# =============================================================================
# Rate Solver (XIRR)
# =============================================================================

# Day count for annualization (leap-year averaged).
#
# Used by:
# - performance/xirr.py: year fractions relative to the first flow
#
# Must stay at 365.25 for numeric compatibility with spreadsheet XIRR results.
DAYS_IN_YEAR: float = 365.25

# Starting rate for Newton-Raphson.
DEFAULT_XIRR_GUESS: float = 0.1

# Iteration ceiling; the solver returns None once it is reached.
XIRR_MAX_ITERATIONS: int = 100

# Convergence threshold, applied both to |NPV| and to the step between iterates.
XIRR_TOLERANCE: float = 1e-7

# Iterate clamp range: -99% to +1000% annualized.
XIRR_MIN_RATE: float = -0.99
XIRR_MAX_RATE: float = 10.0

# Rate nudge applied instead of dividing when |dNPV/drate| falls below the tolerance.
XIRR_FLAT_SLOPE_NUDGE: float = 0.1

# =============================================================================
# Quantities
# =============================================================================

# Tolerance for comparing share quantities (absolute and relative).
#
# Used by:
# - performance/_average_cost.py: a sell within this of the holding closes it
# - performance/holdings.py: quantities within this of zero are not holdings
#
# Fractional units (funds) accumulate float drift: 0.1 + 0.2 != 0.3.
QUANTITY_EPSILON: float = 1e-9
