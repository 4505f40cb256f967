"""RentNoiseFilter: strips native-asset rent refunds from a swapper's balance changes."""

import logging
from collections.abc import Iterable

from swaptrace.parser.utils.context import ClassifierContext
from swaptrace.parser.utils.types import BalanceChange, FilteredChanges

logger = logging.getLogger(__name__)


class RentNoiseFilter:
    """Closing a token account during a swap refunds a small SOL rent deposit.

    That refund is not part of the trade: left in, it turns a pure token SELL into a
    two-asset swap with the wrong direction. A swapper-owned change is rent noise iff it is
    native, positive, below rent_threshold, and the swapper also moved some non-native asset.

    ``activity`` lists extra swapper movements that count towards non-native activity
    without being partitioned, e.g. token legs that only appear as itemized transfers.
    """

    def __init__(self, context: ClassifierContext) -> None:
        self._context = context

    def filter(
        self,
        changes: list[BalanceChange] | tuple[BalanceChange, ...],
        swapper: str,
        activity: Iterable[BalanceChange] = (),
    ) -> FilteredChanges:
        owned = [c for c in changes if c.owner == swapper]
        has_non_native_activity = any(
            c.owner == swapper and c.is_well_formed and not self._context.is_native(c.mint) and c.amount != 0
            for c in [*owned, *activity]
        )

        economic: list[BalanceChange] = []
        non_economic: list[BalanceChange] = []
        for change in owned:
            if has_non_native_activity and self.is_rent_refund(change):
                non_economic.append(change)
            else:
                economic.append(change)

        if non_economic:
            logger.debug(
                "Filtered %d rent refund(s) for %s: %s",
                len(non_economic), swapper, [str(c.amount) for c in non_economic],
            )
        return FilteredChanges(economic=tuple(economic), non_economic=tuple(non_economic))

    def is_rent_refund(self, change: BalanceChange) -> bool:
        """Native, positive and below rent_threshold. Ignores whether tokens also moved."""
        return (
            change.amount.is_finite()
            and self._context.is_native(change.mint)
            and change.amount > 0
            and abs(change.amount) < self._context.rent_threshold
        )
