"""Base parser interfaces."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence

from swaptrace.domain.enums import DataProvider, EraseReason
from swaptrace.parser.stages.noise_filter import RentNoiseFilter
from swaptrace.parser.stages.output import OutputGenerator, validate_active_assets
from swaptrace.parser.stages.split import SplitSwapDetector
from swaptrace.parser.stages.swapper import build_swapper_identifier
from swaptrace.parser.utils.addresses import (
    NON_SWAP_TRANSACTION_TYPES,
    PROTOCOL_ACTION_TYPES,
    SWAP_ACTION_TYPES,
    TRANSFER_ACTION_TYPES,
)
from swaptrace.parser.utils.context import ClassifierContext
from swaptrace.parser.utils.types import (
    AssetDelta,
    ClassificationResult,
    EraseResult,
    FilteredChanges,
    SwapMetadata,
    SwapperResult,
    SwapTransaction,
)

logger = logging.getLogger(__name__)

_SUCCESS_STATUSES = frozenset({"success", "succeeded", "ok"})


def only_transfer_actions(action_types: Sequence[str]) -> bool:
    """No swap action, and every action that is not bookkeeping just moves funds."""
    if any(t in SWAP_ACTION_TYPES for t in action_types):
        return False
    meaningful = [t for t in action_types if t and t not in PROTOCOL_ACTION_TYPES]
    return bool(meaningful) and all(t in TRANSFER_ACTION_TYPES for t in meaningful)


class BaseSwapParser(ABC):
    """Shared pipeline for both provider variants.

    Subclasses turn a raw payload into a typed transaction and supply the variant-specific
    stages (what the swapper is identified from, how deltas are collected). Everything after
    the asset map is common: active-asset check, split detection, core-only suppression,
    output generation.
    """

    PARSER_NAME: str = "BaseSwapParser"
    PROVIDER: DataProvider

    def __init__(self, context: ClassifierContext) -> None:
        self._context = context
        self._identifier = build_swapper_identifier(context)
        self._noise_filter = RentNoiseFilter(context)
        self._split_detector = SplitSwapDetector(context)
        self._output = OutputGenerator(context)

    @abstractmethod
    def can_parse(self, tx_data: dict) -> bool:
        """Quick check: does this payload look like this provider's format?"""

    @abstractmethod
    def parse(self, tx_data: dict) -> ClassificationResult:
        """Classify a raw provider payload."""

    # -- pipeline pieces --

    def _gate(self, tx: SwapTransaction, has_records: bool) -> EraseResult | None:
        """Transaction-level checks that run before any per-owner work."""
        if not tx.signature or not tx.fee_payer or not has_records:
            return self._erase(tx, EraseReason.INVALID_INPUT, {
                "has_signature": bool(tx.signature),
                "has_fee_payer": bool(tx.fee_payer),
                "has_records": has_records,
            })
        if tx.status is not None and tx.status.lower() not in _SUCCESS_STATUSES:
            return self._erase(tx, EraseReason.TRANSACTION_FAILED, {"status": tx.status})
        if tx.type is not None and tx.type.upper() in NON_SWAP_TRANSACTION_TYPES:
            return self._erase(tx, EraseReason.NON_SWAP_TRANSACTION_TYPE, {"type": tx.type})
        if only_transfer_actions(tx.action_types):
            return self._erase(tx, EraseReason.ONLY_TRANSFER_ACTIONS, {"actions": list(tx.action_types)})
        return None

    def _unresolved(self, tx: SwapTransaction, swapper_result: SwapperResult) -> ClassificationResult:
        if len(swapper_result.candidates) > 1:
            reason = EraseReason.MULTIPLE_CANDIDATES
        else:
            reason = EraseReason.NO_SWAPPER
        return self._rejected(self._erase(tx, reason, {
            "fee_payer": tx.fee_payer,
            "signers": list(tx.signers),
            "candidates": list(swapper_result.candidates),
        }))

    def _finish(
        self,
        tx: SwapTransaction,
        swapper_result: SwapperResult,
        asset_map: Mapping[str, AssetDelta],
        filtered: FilteredChanges,
    ) -> ClassificationResult:
        active = [a for a in asset_map.values() if not a.is_intermediate]
        erase = validate_active_assets(active, tx.signature, tx.timestamp, swapper_result.swapper)
        if erase is not None:
            return self._rejected(erase)

        detection = self._split_detector.detect(asset_map, tx.signature, tx.timestamp)
        if isinstance(detection, EraseResult):
            return self._rejected(detection)

        entry, exit = detection.entry_asset, detection.exit_asset
        if (
            self._context.suppress_core_swaps
            and self._context.is_priority(entry.mint)
            and self._context.is_priority(exit.mint)
        ):
            return self._rejected(self._erase(tx, EraseReason.CORE_ONLY_SWAP, {
                "entry": entry.symbol,
                "exit": exit.symbol,
            }))

        routing_mint = detection.routing_asset.mint if detection.routing_asset is not None else None
        metadata = SwapMetadata(
            protocol=tx.protocol or self._context.default_protocol,
            rent_refunds_filtered=filtered.rent_refunds_filtered,
            intermediate_assets_collapsed=any(
                a.is_intermediate and a.mint != routing_mint for a in asset_map.values()
            ),
        )
        swaps = self._output.generate(tx, swapper_result, active, detection, metadata)
        for swap in swaps:
            logger.info(
                "%s %s %s %s for %s %s (swapper=%s via %s)",
                tx.signature, swap.direction.value, swap.amounts.base_amount, swap.base_asset.symbol,
                swap.amounts.quote_amount, swap.quote_asset.symbol, swap.swapper, swap.swapper_method.value,
            )
        return ClassificationResult(swaps=tuple(swaps))

    @staticmethod
    def _erase(tx: SwapTransaction, reason: EraseReason, debug_info: dict | None = None) -> EraseResult:
        return EraseResult(
            signature=tx.signature,
            timestamp=tx.timestamp,
            reason=reason,
            debug_info=debug_info or {},
        )

    @staticmethod
    def _rejected(erase: EraseResult) -> ClassificationResult:
        logger.info("%s erased: %s %s", erase.signature or "<no signature>", erase.reason.value, erase.debug_info)
        return ClassificationResult(erase=erase)

