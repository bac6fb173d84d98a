"""
Shared test fixtures.

PHILOSOPHY: Use REAL objects wherever possible.
- Real Pydantic event models (not dicts pretending to be models)
- No I/O: every calculation under test is pure
"""

from __future__ import annotations

import itertools
from datetime import date
from typing import TYPE_CHECKING

import pytest

from ledger_performance.events import (
    CashEvent,
    DividendEvent,
    EventType,
    FeeEvent,
    Instrument,
    TradeEvent,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def event_ids() -> Iterator[str]:
    """Sequential event ids (evt_1, evt_2, ...) scoped to one test."""
    return (f"evt_{n}" for n in itertools.count(1))


# ============================================================================
# Event Factories
# ============================================================================
@pytest.fixture
def make_trade(event_ids: Iterator[str]) -> Callable[..., TradeEvent]:
    """Factory for TRADE_BUY / TRADE_SELL events."""

    def _make(
        event_type: EventType,
        isin: str,
        quantity: float,
        amount: float,
        on: date,
        fee: float | None = 0.0,
        account_id: str = "acc_1",
        event_id: str | None = None,
    ) -> TradeEvent:
        return TradeEvent(
            id=event_id or next(event_ids),
            account_id=account_id,
            date=on,
            type=event_type,
            isin=isin,
            quantity=quantity,
            price_per_share=amount / quantity,
            amount=amount,
            fee=fee,
        )

    return _make


@pytest.fixture
def make_buy(make_trade: Callable[..., TradeEvent]) -> Callable[..., TradeEvent]:
    def _make(isin: str, quantity: float, amount: float, on: date, **kwargs: object) -> TradeEvent:
        return make_trade(EventType.TRADE_BUY, isin, quantity, amount, on, **kwargs)

    return _make


@pytest.fixture
def make_sell(make_trade: Callable[..., TradeEvent]) -> Callable[..., TradeEvent]:
    def _make(isin: str, quantity: float, amount: float, on: date, **kwargs: object) -> TradeEvent:
        return make_trade(EventType.TRADE_SELL, isin, quantity, amount, on, **kwargs)

    return _make


@pytest.fixture
def make_dividend(event_ids: Iterator[str]) -> Callable[..., DividendEvent]:
    """Factory for DIVIDEND events."""

    def _make(
        isin: str,
        quantity: float,
        amount: float,
        on: date,
        account_id: str = "acc_1",
    ) -> DividendEvent:
        return DividendEvent(
            id=next(event_ids),
            account_id=account_id,
            date=on,
            isin=isin,
            quantity=quantity,
            per_share=amount / quantity if quantity else 0.0,
            amount=amount,
        )

    return _make


@pytest.fixture
def make_fee(event_ids: Iterator[str]) -> Callable[..., FeeEvent]:
    """Factory for standalone FEE events."""

    def _make(amount: float, on: date, description: str = "Custody fee") -> FeeEvent:
        return FeeEvent(
            id=next(event_ids),
            account_id="acc_1",
            date=on,
            amount=amount,
            description=description,
        )

    return _make


@pytest.fixture
def make_cash(event_ids: Iterator[str]) -> Callable[..., CashEvent]:
    """Factory for CASH_IN / CASH_OUT events."""

    def _make(
        event_type: EventType,
        amount: float,
        on: date,
        account_id: str = "acc_1",
    ) -> CashEvent:
        return CashEvent(
            id=next(event_ids),
            account_id=account_id,
            date=on,
            type=event_type,
            amount=amount,
        )

    return _make


@pytest.fixture
def instruments() -> list[Instrument]:
    """Reference data for two of the three test ISINs (NO0010817851 is deliberately missing)."""
    return [
        Instrument(isin="NO0010096985", ticker="EQNR", name="Equinor ASA"),
        Instrument(isin="NO0010161896", ticker="DNB", name="DNB Bank ASA"),
    ]
