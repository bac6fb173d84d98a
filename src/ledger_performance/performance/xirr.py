"""XIRR (money-weighted return) rate solver.

Finds the annualized rate `r` at which the net present value of irregularly dated cash
flows is zero:

    NPV(r) = sum(amount_i / (1 + r) ** years_i)

where `years_i` is the distance from the earliest flow in years of `days_in_year` days
(365.25 by default, matching spreadsheet XIRR). The root is found with Newton-Raphson,
guarded against flat slopes and clamped to a sane rate range.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import structlog

from ledger_performance.config import DEFAULT_SOLVER_CONFIG
from ledger_performance.constants import DAYS_IN_YEAR

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ledger_performance.config import SolverConfig
    from ledger_performance.performance._models import CashFlow

logger = structlog.get_logger()


def _year_fractions(
    cash_flows: Sequence[CashFlow], days_in_year: float
) -> list[tuple[float, float]]:
    """Return (years since first flow, amount) pairs, sorted by date."""
    ordered = sorted(cash_flows, key=lambda cf: cf.date)
    first_date = ordered[0].date
    return [((cf.date - first_date).days / days_in_year, cf.amount) for cf in ordered]


def _npv_and_derivative(rate: float, flows: Sequence[tuple[float, float]]) -> tuple[float, float]:
    npv_terms: list[float] = []
    derivative_terms: list[float] = []
    for years, amount in flows:
        discount_factor = (1 + rate) ** years
        npv_terms.append(amount / discount_factor)
        derivative_terms.append(-years * amount / (discount_factor * (1 + rate)))
    # fsum keeps the result independent of the order of same-dated flows.
    return math.fsum(npv_terms), math.fsum(derivative_terms)


def xnpv(
    rate: float, cash_flows: Sequence[CashFlow], days_in_year: float = DAYS_IN_YEAR
) -> float:
    """
    Net present value of dated cash flows, discounted to the earliest flow date.

    Args:
        rate: Annualized discount rate (must be greater than -1).
        cash_flows: Flows to discount; must not be empty.
        days_in_year: Day count for annualization (365.25 by default).

    Returns:
        NPV in the flows' currency.

    Raises:
        ValueError: If `cash_flows` is empty or `rate` is not greater than -1.
    """
    if not cash_flows:
        raise ValueError("xnpv needs at least one cash flow")
    if rate <= -1:
        raise ValueError(f"Discount rate must be greater than -1 (got {rate})")
    npv, _ = _npv_and_derivative(rate, _year_fractions(cash_flows, days_in_year))
    return npv


def _has_sign_change(cash_flows: Sequence[CashFlow]) -> bool:
    has_negative = any(cf.amount < 0 for cf in cash_flows)
    has_positive = any(cf.amount > 0 for cf in cash_flows)
    return has_negative and has_positive


def solve_xirr(
    cash_flows: Sequence[CashFlow],
    initial_guess: float | None = None,
    *,
    config: SolverConfig | None = None,
) -> float | None:
    """
    Solve for the annualized internal rate of return of dated cash flows.

    Returns None (not an error) when no rate can be computed:
    - fewer than 2 flows
    - no sign change (all flows positive, or all negative)
    - no convergence within `max_iterations`

    Iteration rules:
    - Return the current rate once |NPV| < tolerance.
    - If |dNPV/drate| < tolerance, nudge the rate up by `flat_slope_nudge` and retry.
    - Return the Newton step once it moves the rate by less than tolerance.
    - Otherwise clamp the new rate to [min_rate, max_rate] and iterate.

    Args:
        cash_flows: Signed, dated flows (outflows negative, inflows positive).
        initial_guess: Starting rate (defaults to `config.initial_guess`, 0.1).
        config: Solver parameters (defaults to `DEFAULT_SOLVER_CONFIG`).

    Returns:
        Annualized rate as a fraction (0.1 == 10%), or None.
    """
    cfg = config if config is not None else DEFAULT_SOLVER_CONFIG

    if len(cash_flows) < 2:
        logger.debug("XIRR unavailable: fewer than 2 cash flows", flows=len(cash_flows))
        return None
    if not _has_sign_change(cash_flows):
        logger.debug("XIRR unavailable: cash flows have no sign change", flows=len(cash_flows))
        return None

    flows = _year_fractions(cash_flows, cfg.days_in_year)
    rate = cfg.initial_guess if initial_guess is None else initial_guess
    # A guess at or below -100% would make the discount base non-positive.
    rate = min(max(rate, cfg.min_rate), cfg.max_rate)

    for iteration in range(cfg.max_iterations):
        try:
            npv, derivative = _npv_and_derivative(rate, flows)
        except (OverflowError, ZeroDivisionError):
            logger.debug("XIRR unavailable: discounting overflowed", rate=rate)
            return None

        if abs(npv) < cfg.tolerance:
            logger.debug("XIRR converged on NPV", rate=rate, iterations=iteration)
            return rate

        if abs(derivative) < cfg.tolerance:
            rate += cfg.flat_slope_nudge
            continue

        new_rate = rate - npv / derivative
        if abs(new_rate - rate) < cfg.tolerance:
            logger.debug("XIRR converged on step size", rate=new_rate, iterations=iteration)
            return new_rate

        rate = min(max(new_rate, cfg.min_rate), cfg.max_rate)

    logger.debug(
        "XIRR did not converge",
        max_iterations=cfg.max_iterations,
        last_rate=rate,
        flows=len(cash_flows),
    )
    return None


# Rate Solver entry point under its short name.
solve = solve_xirr
