"""Ledger event and instrument models.

The ledger is an append-only log: events are frozen once created, and corrections are
recorded as new offsetting events. Every calculation in `ledger_performance.performance`
recomputes from the full event list.

`LedgerEvent` is a union discriminated on `type`. Consumers match on the concrete model
class and end with `assert_never`, so a new event kind fails type checking everywhere it
is not handled.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from enum import Enum
from typing import TYPE_CHECKING, Annotated, Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter

from ledger_performance.constants import BASE_CURRENCY

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


def utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(UTC)


class EventType(str, Enum):
    """Kind of ledger event."""

    TRADE_BUY = "TRADE_BUY"
    TRADE_SELL = "TRADE_SELL"
    DIVIDEND = "DIVIDEND"
    FEE = "FEE"
    CASH_IN = "CASH_IN"
    CASH_OUT = "CASH_OUT"


class EventSource(str, Enum):
    """Provenance of a ledger event."""

    MANUAL = "MANUAL"
    CSV_IMPORT = "CSV_IMPORT"


class _BaseEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    """Unique event identifier."""

    account_id: str = Field(validation_alias=AliasChoices("account_id", "accountId"))
    """Account the event was booked on."""

    date: date
    """Economic date (no time of day)."""

    amount: float = Field(ge=0)
    """Non-negative amount; the sign is implied by the event type."""

    currency: str = BASE_CURRENCY

    created_at: datetime = Field(
        default_factory=utc_now,
        validation_alias=AliasChoices("created_at", "createdAt"),
    )
    """Ingestion timestamp, not the economic date."""

    source: EventSource = EventSource.MANUAL
    notes: str | None = None


class TradeEvent(_BaseEvent):
    """Buy or sell of an instrument. `amount` is the gross trade value excluding fee."""

    type: Literal[EventType.TRADE_BUY, EventType.TRADE_SELL]
    isin: str
    quantity: float = Field(gt=0)
    price_per_share: float = Field(
        ge=0, validation_alias=AliasChoices("price_per_share", "pricePerShare")
    )
    fee: float | None = Field(default=None, ge=0)
    """Brokerage fee; None when the source did not report one."""

    @property
    def is_buy(self) -> bool:
        return self.type == EventType.TRADE_BUY

    @property
    def fee_or_zero(self) -> float:
        return self.fee if self.fee is not None else 0.0


class DividendEvent(_BaseEvent):
    """Cash dividend received for an instrument."""

    type: Literal[EventType.DIVIDEND] = EventType.DIVIDEND
    isin: str
    quantity: float = Field(ge=0)
    """Shares held at the time of the dividend."""

    per_share: float = Field(ge=0, validation_alias=AliasChoices("per_share", "perShare"))
    withholding_tax: float | None = Field(
        default=None,
        ge=0,
        validation_alias=AliasChoices("withholding_tax", "withholdingTax"),
    )
    """Carried for reference only; never deducted from `amount`."""


class FeeEvent(_BaseEvent):
    """Standalone account fee."""

    type: Literal[EventType.FEE] = EventType.FEE
    description: str = ""


class CashEvent(_BaseEvent):
    """Capital moved into (CASH_IN) or out of (CASH_OUT) the account."""

    type: Literal[EventType.CASH_IN, EventType.CASH_OUT]

    @property
    def is_deposit(self) -> bool:
        return self.type == EventType.CASH_IN


LedgerEvent = Annotated[
    TradeEvent | DividendEvent | FeeEvent | CashEvent,
    Field(discriminator="type"),
]


class Instrument(BaseModel):
    """Static reference data for a tradable instrument."""

    model_config = ConfigDict(frozen=True)

    isin: str
    ticker: str
    name: str
    currency: str = BASE_CURRENCY


_events_adapter: TypeAdapter[list[LedgerEvent]] = TypeAdapter(list[LedgerEvent])
_instruments_adapter: TypeAdapter[list[Instrument]] = TypeAdapter(list[Instrument])


def parse_events(raw: Iterable[Mapping[str, Any]]) -> list[LedgerEvent]:
    """
    Validate raw event mappings (snake_case or camelCase keys) into event models.

    Raises:
        pydantic.ValidationError: If any event is malformed or has an unknown `type`.
    """
    return _events_adapter.validate_python(list(raw))


def parse_instruments(raw: Iterable[Mapping[str, Any]]) -> list[Instrument]:
    """Validate raw instrument mappings into `Instrument` models."""
    return _instruments_adapter.validate_python(list(raw))
