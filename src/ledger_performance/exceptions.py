"""Custom exceptions for ledger performance calculations."""

from __future__ import annotations


class LedgerPerformanceError(Exception):
    """Base exception for this package."""


class SolverConfigError(LedgerPerformanceError):
    """Inconsistent rate solver configuration.

    Not a `ValueError` subclass, so pydantic validators let it propagate as-is.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Invalid solver config: {message}")
