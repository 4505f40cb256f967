"""Swapper identification strategies.

Two heuristics answer "which wallet is the economic actor?" and they can disagree on
ambiguous transactions, so exactly one is selected per deployment (Settings.swapper_strategy).
Both refuse to pick system programs, token programs or known AMM pools/vaults: pools carry
the largest raw deltas in any swap.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from decimal import Decimal

from swaptrace.domain.enums import Confidence, SwapperMethod, SwapperStrategy
from swaptrace.parser.utils.context import ClassifierContext
from swaptrace.parser.utils.types import BalanceChange, SwapperResult

logger = logging.getLogger(__name__)


class SwapperIdentifier(ABC):
    """Interface every identification strategy implements."""

    STRATEGY: SwapperStrategy

    def __init__(self, context: ClassifierContext) -> None:
        self._context = context

    @abstractmethod
    def identify(
        self,
        fee_payer: str,
        signers: Sequence[str],
        changes: Sequence[BalanceChange],
    ) -> SwapperResult:
        """Resolve the swapper, or return method=erase with the remaining candidates."""

    @staticmethod
    def _moving_changes(changes: Sequence[BalanceChange]) -> list[BalanceChange]:
        return [c for c in changes if c.owner and c.is_well_formed and c.amount != 0]

    @staticmethod
    def _erase(candidates: Sequence[str] = ()) -> SwapperResult:
        return SwapperResult(
            swapper=None,
            confidence=Confidence.LOW,
            method=SwapperMethod.ERASE,
            candidates=tuple(sorted(candidates)),
        )


class EscalationSwapperIdentifier(SwapperIdentifier):
    """fee payer (high) -> primary signer (medium) -> sole non-system owner (low) -> erase."""

    STRATEGY = SwapperStrategy.ESCALATION

    def identify(
        self,
        fee_payer: str,
        signers: Sequence[str],
        changes: Sequence[BalanceChange],
    ) -> SwapperResult:
        owners = {c.owner for c in self._moving_changes(changes)}

        if fee_payer and fee_payer in owners:
            logger.debug("Swapper %s resolved via fee payer", fee_payer)
            return SwapperResult(swapper=fee_payer, confidence=Confidence.HIGH, method=SwapperMethod.FEE_PAYER)

        primary_signer = signers[0] if signers else None
        if primary_signer and primary_signer in owners:
            logger.debug("Swapper %s resolved via primary signer", primary_signer)
            return SwapperResult(swapper=primary_signer, confidence=Confidence.MEDIUM, method=SwapperMethod.SIGNER)

        candidates = sorted(o for o in owners if not self._context.is_excluded(o))
        if len(candidates) == 1:
            logger.debug("Swapper %s resolved via owner analysis", candidates[0])
            return SwapperResult(
                swapper=candidates[0], confidence=Confidence.LOW, method=SwapperMethod.OWNER_ANALYSIS,
            )

        logger.debug("Swapper unresolved: %d candidate owner(s)", len(candidates))
        return self._erase(candidates)


class LargestDeltaSwapperIdentifier(SwapperIdentifier):
    """Owner with the largest summed |delta| wins; ties prefer a unique non-core mover.

    Falls back to the fee payer (low) when the tie cannot be broken.
    """

    STRATEGY = SwapperStrategy.LARGEST_DELTA

    def identify(
        self,
        fee_payer: str,
        signers: Sequence[str],
        changes: Sequence[BalanceChange],
    ) -> SwapperResult:
        totals: dict[str, Decimal] = {}
        touches_non_core: dict[str, bool] = {}
        for change in self._moving_changes(changes):
            if self._context.is_excluded(change.owner):
                continue
            totals[change.owner] = totals.get(change.owner, Decimal(0)) + abs(change.amount)
            if not self._context.is_quote_grade(change.mint):
                touches_non_core[change.owner] = True

        top: list[str] = []
        if totals:
            largest = max(totals.values())
            top = sorted(owner for owner, total in totals.items() if total == largest)

        if len(top) == 1:
            logger.debug("Swapper %s resolved via largest economic delta", top[0])
            return SwapperResult(swapper=top[0], confidence=Confidence.HIGH, method=SwapperMethod.LARGEST_DELTA)

        non_core_top = [owner for owner in top if touches_non_core.get(owner)]
        if len(non_core_top) == 1:
            logger.debug("Swapper %s resolved via non-core tie-break", non_core_top[0])
            return SwapperResult(
                swapper=non_core_top[0], confidence=Confidence.MEDIUM, method=SwapperMethod.LARGEST_DELTA,
            )

        if fee_payer and totals.get(fee_payer, Decimal(0)) > 0:
            logger.debug("Swapper tie among %d owner(s), falling back to fee payer %s", len(top), fee_payer)
            return SwapperResult(swapper=fee_payer, confidence=Confidence.LOW, method=SwapperMethod.FEE_PAYER)

        logger.debug("Swapper unresolved after tie-breaks: %d candidate owner(s)", len(top))
        return self._erase(top)


_STRATEGIES: dict[SwapperStrategy, type[SwapperIdentifier]] = {
    SwapperStrategy.ESCALATION: EscalationSwapperIdentifier,
    SwapperStrategy.LARGEST_DELTA: LargestDeltaSwapperIdentifier,
}


def build_swapper_identifier(context: ClassifierContext) -> SwapperIdentifier:
    """Instantiate the strategy the deployment selected."""
    return _STRATEGIES[context.swapper_strategy](context)
