"""Data-quality warnings for a ledger.

Flags ledger content that makes derived holdings or returns less trustworthy. Nothing
here rejects events: the warnings are for the presentation layer to show next to the
figures they affect.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ledger_performance.events import TradeEvent
from ledger_performance.performance._average_cost import fold_average_cost, group_by_isin
from ledger_performance.performance._models import (
    DataQualityWarning,
    WarningKind,
    WarningSeverity,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ledger_performance.events import Instrument, LedgerEvent


def _warning_id(kind: WarningKind, index: int) -> str:
    return f"warn_{kind.value.lower()}_{index}"


def derive_data_quality_warnings(
    events: Iterable[LedgerEvent],
    instruments: Iterable[Instrument],
) -> list[DataQualityWarning]:
    """
    Inspect the ledger for gaps that affect derived figures.

    Warnings, in this order:
    - MISSING_FEE (WARNING): one warning listing every trade without a reported fee.
      Cost basis and XIRR treat the fee as 0 for those trades.
    - OVERSELL (ERROR): one per ISIN whose sells exceed the shares held at the time.
      The excess is ignored by the holdings fold.
    - UNKNOWN_INSTRUMENT (INFO): one per referenced ISIN (traded or paid a dividend)
      without an instrument record.

    Args:
        events: Ledger events in any order.
        instruments: Reference data to check ISINs against.

    Returns:
        Warnings with deterministic ids; empty when the ledger looks clean.
    """
    events = list(events)
    known_isins = {instrument.isin for instrument in instruments}
    warnings: list[DataQualityWarning] = []

    missing_fee_ids = [
        event.id for event in events if isinstance(event, TradeEvent) and event.fee is None
    ]
    if missing_fee_ids:
        warnings.append(
            DataQualityWarning(
                id=_warning_id(WarningKind.MISSING_FEE, 1),
                kind=WarningKind.MISSING_FEE,
                severity=WarningSeverity.WARNING,
                message=f"Missing fee on {len(missing_fee_ids)} trades",
                affected_event_ids=tuple(missing_fee_ids),
                suggested_fix="Check the broker's transaction history for brokerage fees",
            )
        )

    grouped = group_by_isin(events)

    oversell_count = 0
    for isin in sorted(grouped):
        state = fold_average_cost(grouped[isin].trades)
        if state.oversold_quantity <= 0:
            continue
        oversell_count += 1
        warnings.append(
            DataQualityWarning(
                id=_warning_id(WarningKind.OVERSELL, oversell_count),
                kind=WarningKind.OVERSELL,
                severity=WarningSeverity.ERROR,
                message=(
                    f"Sells of {isin} exceed recorded holdings by "
                    f"{state.oversold_quantity:g} shares"
                ),
                affected_event_ids=tuple(state.oversell_event_ids),
                suggested_fix="Import the missing buy trades or correct the sell quantity",
            )
        )

    unknown_isins = sorted(isin for isin in grouped if isin not in known_isins)
    for index, isin in enumerate(unknown_isins, start=1):
        affected = [*grouped[isin].trades, *grouped[isin].dividends]
        warnings.append(
            DataQualityWarning(
                id=_warning_id(WarningKind.UNKNOWN_INSTRUMENT, index),
                kind=WarningKind.UNKNOWN_INSTRUMENT,
                severity=WarningSeverity.INFO,
                message=f"No instrument record for {isin}",
                affected_event_ids=tuple(event.id for event in affected),
                suggested_fix="Add the instrument's ticker and name",
            )
        )

    return warnings
