"""BalanceChangeSwapParser: swap classification from per-owner balance changes (Shyft)."""

import logging
from decimal import Decimal

from swaptrace.domain.enums import DataProvider, DeltaSource
from swaptrace.parser.generic.base import BaseSwapParser
from swaptrace.parser.stages.deltas import BalanceDeltaCollector
from swaptrace.parser.utils.addresses import NATIVE_DECIMALS
from swaptrace.parser.utils.context import ClassifierContext
from swaptrace.parser.utils.shyft_changes import extract_swap_transaction
from swaptrace.parser.utils.types import (
    AssetDelta,
    BalanceChange,
    ClassificationResult,
    SwapperResult,
    SwapTransaction,
)

logger = logging.getLogger(__name__)


class BalanceChangeSwapParser(BaseSwapParser):
    """Identifies the swapper over all balance changes, then works on that owner's records only.

    Shyft does not always report every leg as a balance change. Before noise filtering the
    swapper's records are completed from the payload's actions:
      - bonding curves move native SOL through plain system transfers, so when the swapper has
        no native record the net of its SOL_TRANSFER actions is added as one synthetic change;
      - a SWAP action's tokens_swapped fills in any in/out mint the swapper has no record for.
    If the fee payer still ends up with a single non-core asset, the largest core-asset
    movement elsewhere in the transaction is taken as the other side of the trade.
    """

    PARSER_NAME = "BalanceChangeSwapParser"
    PROVIDER = DataProvider.SHYFT

    def __init__(self, context: ClassifierContext) -> None:
        super().__init__(context)
        self._collector = BalanceDeltaCollector(context)

    def can_parse(self, tx_data: dict) -> bool:
        return "token_balance_changes" in tx_data

    def parse(self, tx_data: dict) -> ClassificationResult:
        tx = extract_swap_transaction(tx_data)
        return self.classify(tx, has_records=self.can_parse(tx_data))

    def classify(self, tx: SwapTransaction, has_records: bool = True) -> ClassificationResult:
        erase = self._gate(tx, has_records)
        if erase is not None:
            return self._rejected(erase)

        swapper_result = self._identifier.identify(tx.fee_payer, tx.signers, tx.balance_changes)
        if not swapper_result.resolved:
            return self._unresolved(tx, swapper_result)
        swapper = swapper_result.swapper

        changes = self._augment_from_actions(tx, swapper)
        filtered = self._noise_filter.filter(changes, swapper)
        asset_map = self._collector.collect(filtered.economic, swapper)
        asset_map = self._recover_counter_leg(tx, swapper_result, asset_map, changes)
        return self._finish(tx, swapper_result, asset_map, filtered)

    def _augment_from_actions(self, tx: SwapTransaction, swapper: str) -> list[BalanceChange]:
        changes = list(tx.balance_changes)
        native = self._native_from_transfers(tx, swapper, changes)
        if native is not None:
            changes.append(native)

        for leg in tx.action_swap_legs:
            if leg.owner != swapper or any(c.owner == swapper and c.mint == leg.mint for c in changes):
                continue
            logger.debug("Added %s %s for %s from swap action", leg.amount, leg.mint, swapper)
            changes.append(leg)
        return changes

    def _native_from_transfers(
        self, tx: SwapTransaction, swapper: str, changes: list[BalanceChange],
    ) -> BalanceChange | None:
        native_mint = self._context.native_mint
        if not tx.native_transfers or any(c.owner == swapper and c.mint == native_mint for c in changes):
            return None

        net = Decimal(0)
        for transfer in tx.native_transfers:
            if not transfer.is_well_formed or transfer.from_owner == transfer.to_owner:
                continue
            if transfer.to_owner == swapper:
                net += transfer.amount
            elif transfer.from_owner == swapper:
                net -= transfer.amount

        if abs(net) < self._context.dust_threshold:
            return None

        logger.debug("Added native delta %s for %s from transfer actions", net, swapper)
        return BalanceChange(
            mint=native_mint,
            owner=swapper,
            amount=net,
            decimals=NATIVE_DECIMALS,
            address=swapper,
        )

    def _recover_counter_leg(
        self,
        tx: SwapTransaction,
        swapper_result: SwapperResult,
        asset_map: dict[str, AssetDelta],
        changes: list[BalanceChange],
    ) -> dict[str, AssetDelta]:
        swapper = swapper_result.swapper
        if swapper != tx.fee_payer:
            return asset_map
        active = [a for a in asset_map.values() if not a.is_intermediate]
        if len(active) != 1 or self._context.is_priority(active[0].mint):
            return asset_map

        candidates = [
            c for c in changes
            if c.owner != swapper
            and c.is_well_formed
            and self._context.is_priority(c.mint)
            and abs(c.amount) >= self._context.dust_threshold
            and not self._noise_filter.is_rent_refund(c)
        ]
        if not candidates:
            return asset_map

        core = max(candidates, key=lambda c: (abs(c.amount), c.mint))
        magnitude = abs(core.amount)
        delta = -magnitude if active[0].delta > 0 else magnitude
        logger.debug(
            "%s: recovered %s %s as counter-leg of %s from %s",
            tx.signature, delta, core.mint, active[0].symbol, core.owner,
        )

        recovered = dict(asset_map)
        recovered[core.mint] = AssetDelta(
            mint=core.mint,
            symbol=self._context.symbol_for(core.mint, core.symbol),
            decimals=core.decimals,
            delta=delta,
            gross_in=max(delta, Decimal(0)),
            gross_out=max(-delta, Decimal(0)),
            source=DeltaSource.COUNTERPARTY,
        )
        return recovered
