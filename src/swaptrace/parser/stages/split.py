"""SplitSwapDetector: picks entry/exit assets and decides whether to emit one or two records."""

import logging
from collections.abc import Mapping

from swaptrace.domain.enums import EraseReason, SplitReason
from swaptrace.parser.utils.context import ClassifierContext
from swaptrace.parser.utils.types import AssetDelta, EraseResult, SplitDetectionResult

logger = logging.getLogger(__name__)


class SplitSwapDetector:
    """Token-to-token swaps with no priority side are reported as a SELL leg plus a BUY leg.

    Entry is the most negative non-intermediate asset, exit the most positive. Ties break on
    mint so the choice is stable across runs. If one side is missing the transaction is
    rejected rather than guessed.
    """

    def __init__(self, context: ClassifierContext) -> None:
        self._context = context

    def detect(
        self,
        asset_map: Mapping[str, AssetDelta],
        signature: str,
        timestamp: int = 0,
    ) -> SplitDetectionResult | EraseResult:
        active = [a for a in asset_map.values() if not a.is_intermediate]
        negatives = [a for a in active if a.delta < 0]
        positives = [a for a in active if a.delta > 0]

        if not negatives or not positives:
            logger.debug(
                "No opposite deltas in %s: %d negative, %d positive", signature, len(negatives), len(positives),
            )
            return EraseResult(
                signature=signature,
                timestamp=timestamp,
                reason=EraseReason.NO_OPPOSITE_DELTAS,
                debug_info={
                    "negative": [a.mint for a in negatives],
                    "positive": [a.mint for a in positives],
                },
            )

        entry = min(negatives, key=lambda a: (a.delta, a.mint))
        exit = max(positives, key=lambda a: (a.delta, a.mint))

        if self._context.is_priority(entry.mint) or self._context.is_priority(exit.mint):
            return SplitDetectionResult(split_required=False, entry_asset=entry, exit_asset=exit)

        routing = self.routing_asset(asset_map)
        if routing is not None:
            reason = SplitReason.ROUTED_THROUGH_INTERMEDIATE
        else:
            reason = SplitReason.TOKEN_TO_TOKEN_UNSTABLE_PAIR

        logger.debug(
            "Split required for %s: %s -> %s (%s)", signature, entry.symbol, exit.symbol, reason.value,
        )
        return SplitDetectionResult(
            split_required=True,
            entry_asset=entry,
            exit_asset=exit,
            split_reason=reason,
            routing_asset=routing,
        )

    def is_significant(self, asset: AssetDelta) -> bool:
        """An intermediate both received and paid out in meaningful size."""
        floor = self._context.intermediate_min_gross
        return asset.is_intermediate and asset.gross_in > floor and asset.gross_out > floor

    def routing_asset(self, asset_map: Mapping[str, AssetDelta]) -> AssetDelta | None:
        significant = [a for a in asset_map.values() if self.is_significant(a)]
        if not significant:
            return None
        # Prefer the quote-grade hop (usually SOL or USDC), then the larger flow
        return max(
            significant,
            key=lambda a: (self._context.priority_rank(a.mint), max(a.gross_in, a.gross_out), a.mint),
        )
