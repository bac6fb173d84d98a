"""
Configuration for the XIRR rate solver.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ledger_performance.constants import (
    DAYS_IN_YEAR,
    DEFAULT_XIRR_GUESS,
    XIRR_FLAT_SLOPE_NUDGE,
    XIRR_MAX_ITERATIONS,
    XIRR_MAX_RATE,
    XIRR_MIN_RATE,
    XIRR_TOLERANCE,
)
from ledger_performance.exceptions import SolverConfigError


class SolverConfig(BaseModel):
    """Newton-Raphson parameters for the XIRR solver."""

    model_config = ConfigDict(frozen=True)

    initial_guess: float = DEFAULT_XIRR_GUESS
    max_iterations: int = Field(default=XIRR_MAX_ITERATIONS, gt=0)
    tolerance: float = XIRR_TOLERANCE
    min_rate: float = XIRR_MIN_RATE
    max_rate: float = XIRR_MAX_RATE
    flat_slope_nudge: float = XIRR_FLAT_SLOPE_NUDGE
    days_in_year: float = Field(default=DAYS_IN_YEAR, gt=0)

    @model_validator(mode="after")
    def _check_ranges(self) -> SolverConfig:
        if self.tolerance <= 0:
            raise SolverConfigError(f"tolerance must be positive (got {self.tolerance})")
        if self.min_rate <= -1:
            raise SolverConfigError(f"min_rate must be greater than -1 (got {self.min_rate})")
        if self.min_rate >= self.max_rate:
            raise SolverConfigError(
                f"min_rate must be below max_rate (got {self.min_rate} >= {self.max_rate})"
            )
        return self


# Frozen, so safe to share between concurrent callers.
DEFAULT_SOLVER_CONFIG = SolverConfig()
