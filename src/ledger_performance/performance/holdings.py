"""Holdings derivation from the ledger event log."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import structlog

from ledger_performance.constants import (
    QUANTITY_EPSILON,
    SYNTHETIC_TICKER_LENGTH,
    UNKNOWN_INSTRUMENT_NAME,
)
from ledger_performance.performance._average_cost import fold_average_cost, group_by_isin
from ledger_performance.performance._models import Holding

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from ledger_performance.events import Instrument, LedgerEvent

logger = structlog.get_logger()


def derive_holdings(
    events: Iterable[LedgerEvent],
    instruments: Iterable[Instrument],
    current_prices: Mapping[str, float],
) -> list[Holding]:
    """
    Fold ledger events into open holdings.

    Per ISIN, trades are replayed under average-cost-basis accounting (see
    `fold_average_cost`) and every dividend ever received is summed, regardless of
    whether the shares were later sold. Only instruments with a positive final quantity
    are returned.

    Missing data never raises:
    - an ISIN without an instrument record (or with a blank ticker or name) gets a ticker
      made from its first 6 characters and the "Unknown" name
    - an ISIN without a current price is valued at 0

    Args:
        events: Ledger events in any order, for any accounts.
        instruments: Reference data, may be incomplete.
        current_prices: ISIN -> current price, may be incomplete.

    Returns:
        Holdings sorted by market value, largest first (ties by ISIN).
    """
    instrument_map = {instrument.isin: instrument for instrument in instruments}
    holdings: list[Holding] = []

    for isin, grouped in group_by_isin(events).items():
        state = fold_average_cost(grouped.trades)
        total_dividends = math.fsum(div.amount for div in grouped.dividends)

        if state.quantity <= QUANTITY_EPSILON:
            continue

        instrument = instrument_map.get(isin)
        current_price = current_prices.get(isin, 0.0)
        market_value = state.quantity * current_price
        unrealized_gain = market_value - state.cost_basis

        holdings.append(
            Holding(
                isin=isin,
                ticker=(instrument.ticker if instrument else "") or isin[:SYNTHETIC_TICKER_LENGTH],
                name=(instrument.name if instrument else "") or UNKNOWN_INSTRUMENT_NAME,
                quantity=state.quantity,
                cost_basis=state.cost_basis,
                average_cost_per_share=state.average_cost,
                current_price=current_price,
                market_value=market_value,
                unrealized_gain=unrealized_gain,
                unrealized_gain_percent=(
                    unrealized_gain / state.cost_basis * 100 if state.cost_basis > 0 else 0.0
                ),
                total_dividends_received=total_dividends,
            )
        )

    holdings.sort(key=lambda h: (-h.market_value, h.isin))
    logger.debug("Derived holdings", count=len(holdings))
    return holdings
