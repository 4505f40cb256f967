"""Direction classification: did the swapper buy or sell the non-priority side?"""

import logging

from swaptrace.domain.enums import TradeDirection
from swaptrace.parser.utils.context import ClassifierContext
from swaptrace.parser.utils.types import AssetDelta

logger = logging.getLogger(__name__)


def classify_direction(entry: AssetDelta, exit: AssetDelta, context: ClassifierContext) -> TradeDirection:
    """BUY when the swapper spent the higher-ranked asset, SELL when they received it.

    Rank order: native > stablecoin > other core > non-priority. Equal ranks resolve to BUY
    (the swapper acquired what they received).
    """
    entry_rank = context.priority_rank(entry.mint)
    exit_rank = context.priority_rank(exit.mint)

    if exit_rank > entry_rank:
        direction = TradeDirection.SELL
    else:
        direction = TradeDirection.BUY

    logger.debug(
        "Direction %s: entry %s (rank %d) -> exit %s (rank %d)",
        direction.value, entry.symbol, entry_rank, exit.symbol, exit_rank,
    )
    return direction
