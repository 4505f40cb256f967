"""OutputGenerator: turns a split decision into canonical ParsedSwap records."""

import logging
from collections.abc import Sequence

from swaptrace.domain.enums import DeltaSource, EraseReason, TradeDirection
from swaptrace.parser.stages.amounts import normalize_amounts
from swaptrace.parser.stages.direction import classify_direction
from swaptrace.parser.utils.context import ClassifierContext
from swaptrace.parser.utils.errors import InvariantViolation
from swaptrace.parser.utils.types import (
    AssetDelta,
    AssetRef,
    EraseResult,
    ParsedSwap,
    SplitDetectionResult,
    SwapAmounts,
    SwapMetadata,
    SwapperResult,
    SwapTransaction,
)

logger = logging.getLogger(__name__)


def validate_active_assets(
    active_assets: Sequence[AssetDelta],
    signature: str,
    timestamp: int = 0,
    swapper: str | None = None,
) -> EraseResult | None:
    """Reject a transaction whose swapper has no economic movement left after filtering."""
    if active_assets:
        return None
    return EraseResult(
        signature=signature,
        timestamp=timestamp,
        reason=EraseReason.SWAPPER_NO_DELTA,
        debug_info={"swapper": swapper},
    )


def _ref(asset: AssetDelta) -> AssetRef:
    return AssetRef(mint=asset.mint, symbol=asset.symbol, decimals=asset.decimals)


class OutputGenerator:
    """Builds one record, or a SELL+BUY pair for split swaps.

    Contract breaches (no swapper, entry not negative, exit not positive) raise
    InvariantViolation: they mean an upstream stage is wrong, not that the input is odd.
    """

    def __init__(self, context: ClassifierContext) -> None:
        self._context = context

    def generate(
        self,
        transaction: SwapTransaction,
        swapper_result: SwapperResult,
        active_assets: Sequence[AssetDelta],
        split_detection: SplitDetectionResult,
        metadata: SwapMetadata,
    ) -> list[ParsedSwap]:
        if not swapper_result.resolved:
            raise InvariantViolation(f"{transaction.signature}: output requested without a resolved swapper")

        entry = split_detection.entry_asset
        exit = split_detection.exit_asset
        if not entry.delta < 0:
            raise InvariantViolation(f"{transaction.signature}: entry delta must be negative, got {entry.delta}")
        if not exit.delta > 0:
            raise InvariantViolation(f"{transaction.signature}: exit delta must be positive, got {exit.delta}")

        active_mints = {a.mint for a in active_assets}
        if entry.mint not in active_mints or exit.mint not in active_mints:
            raise InvariantViolation(f"{transaction.signature}: entry/exit asset missing from active assets")

        def record(direction: TradeDirection, base: AssetDelta, quote: AssetDelta, amounts: SwapAmounts) -> ParsedSwap:
            return ParsedSwap(
                signature=transaction.signature,
                timestamp=transaction.timestamp,
                swapper=swapper_result.swapper,
                confidence=swapper_result.confidence,
                swapper_method=swapper_result.method,
                protocol=metadata.protocol,
                direction=direction,
                base_asset=_ref(base),
                quote_asset=_ref(quote),
                amounts=amounts,
                rent_refunds_filtered=metadata.rent_refunds_filtered,
                intermediate_assets_collapsed=metadata.intermediate_assets_collapsed,
                split_reason=split_detection.split_reason,
            )

        if not split_detection.split_required:
            direction = classify_direction(entry, exit, self._context)
            amounts = normalize_amounts(self._priced_leg(entry), self._priced_leg(exit), direction)
            if direction == TradeDirection.BUY:
                swaps = [record(direction, exit, entry, amounts)]
            else:
                swaps = [record(direction, entry, exit, amounts)]
        else:
            routing = split_detection.routing_asset
            if routing is not None:
                # Each leg is priced by what flowed through the routing asset on its side
                received = routing.model_copy(update={"delta": routing.gross_in})
                spent = routing.model_copy(update={"delta": -routing.gross_out})
                sell_amounts = normalize_amounts(entry, received, TradeDirection.SELL)
                buy_amounts = normalize_amounts(spent, exit, TradeDirection.BUY)
                swaps = [
                    record(TradeDirection.SELL, entry, routing, sell_amounts),
                    record(TradeDirection.BUY, exit, routing, buy_amounts),
                ]
            else:
                swaps = [
                    record(TradeDirection.SELL, entry, exit, normalize_amounts(entry, exit, TradeDirection.SELL)),
                    record(TradeDirection.BUY, exit, entry, normalize_amounts(entry, exit, TradeDirection.BUY)),
                ]

        logger.debug("Generated %d record(s) for %s", len(swaps), transaction.signature)
        return swaps

    def _priced_leg(self, asset: AssetDelta) -> AssetDelta:
        """Wrapped-native transfer legs are priced by their gross side: sent for a BUY, received for a SELL."""
        if asset.source != DeltaSource.TOKEN_TRANSFERS or not self._context.is_native(asset.mint):
            return asset
        if asset.delta < 0:
            return asset.model_copy(update={"delta": -asset.gross_out})
        return asset.model_copy(update={"delta": asset.gross_in})
