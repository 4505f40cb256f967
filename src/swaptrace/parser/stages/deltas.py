"""Delta collectors: aggregate the swapper's economic movements into one AssetDelta per mint."""

import logging
from collections.abc import Iterable
from decimal import Decimal

from swaptrace.domain.enums import DeltaSource
from swaptrace.parser.utils.addresses import NATIVE_DECIMALS
from swaptrace.parser.utils.context import ClassifierContext
from swaptrace.parser.utils.types import AssetDelta, BalanceChange, ItemizedTransfer

logger = logging.getLogger(__name__)

ZERO = Decimal(0)


def _half_unit(decimals: int) -> Decimal:
    """Smallest magnitude that does not round to zero at the given precision."""
    return Decimal(1).scaleb(-decimals) / 2


def _observed_decimals(amount: Decimal) -> int:
    exponent = amount.normalize().as_tuple().exponent
    return max(0, -exponent) if isinstance(exponent, int) else 0


class _Accumulator:
    """Running per-mint totals while a collector walks its records."""

    __slots__ = ("mint", "decimals", "symbol", "gross_in", "gross_out", "source")

    def __init__(self, mint: str, decimals: int | None, symbol: str | None, source: DeltaSource) -> None:
        self.mint = mint
        self.decimals = decimals
        self.symbol = symbol
        self.gross_in = ZERO
        self.gross_out = ZERO
        self.source = source

    def add(self, amount: Decimal) -> None:
        if amount > 0:
            self.gross_in += amount
        elif amount < 0:
            self.gross_out += -amount

    @property
    def net(self) -> Decimal:
        return self.gross_in - self.gross_out


class BalanceDeltaCollector:
    """Aggregates balance-change records (Shyft-style payloads).

    The noise filter has already restricted the input to the swapper's economic changes, so
    every record passed in is summed. An asset whose net rounds to zero is kept in the map
    but flagged intermediate: the swapper routed through it without holding it afterwards.
    """

    def __init__(self, context: ClassifierContext) -> None:
        self._context = context

    def collect(self, economic: Iterable[BalanceChange], swapper: str) -> dict[str, AssetDelta]:
        totals: dict[str, _Accumulator] = {}
        for change in economic:
            if not change.is_well_formed:
                logger.warning(
                    "Skipping malformed balance change for %s: mint=%s amount=%s decimals=%s",
                    swapper, change.mint, change.amount, change.decimals,
                )
                continue
            acc = totals.get(change.mint)
            if acc is None:
                acc = _Accumulator(change.mint, change.decimals, change.symbol, DeltaSource.BALANCE_CHANGES)
                totals[change.mint] = acc
            acc.add(change.amount)

        asset_map: dict[str, AssetDelta] = {}
        for mint, acc in totals.items():
            decimals = acc.decimals if acc.decimals is not None else 0
            net = acc.net
            asset_map[mint] = AssetDelta(
                mint=mint,
                symbol=self._context.symbol_for(mint, acc.symbol),
                decimals=decimals,
                delta=net,
                gross_in=acc.gross_in,
                gross_out=acc.gross_out,
                is_intermediate=self._is_zero_net(net, decimals),
                source=acc.source,
            )

        logger.debug(
            "Collected %d asset(s) for %s: %s",
            len(asset_map), swapper, {a.symbol: str(a.delta) for a in asset_map.values()},
        )
        return asset_map

    def _is_zero_net(self, net: Decimal, decimals: int) -> bool:
        return abs(net) < self._context.epsilon or abs(net) < _half_unit(decimals)


class TransferDeltaCollector:
    """Aggregates itemized transfers (Helius-style payloads), backed by account-level deltas.

    Transfer records name both sides and therefore carry gross in/out per asset. Account-level
    deltas only say what net change an owner saw, so they are used to fill gaps:
      - native asset: wrapped-native transfers first, else the account-level native delta
        when it is at least min_native_delta;
      - tokens: transfers first, then account-level changes for mints no transfer touched.
    After aggregation any asset whose net is below dust_threshold is flagged intermediate.
    """

    def __init__(self, context: ClassifierContext) -> None:
        self._context = context

    def collect(
        self,
        transfers: Iterable[ItemizedTransfer],
        economic: Iterable[BalanceChange],
        swapper: str,
    ) -> dict[str, AssetDelta]:
        economic = list(economic)
        totals = self._from_transfers(transfers, swapper)

        native_mint = self._context.native_mint
        if native_mint not in totals:
            native = self._native_fallback(economic)
            if native is not None:
                totals[native_mint] = native

        for mint, acc in self._from_account_data(economic).items():
            if mint not in totals:
                totals[mint] = acc
            elif totals[mint].decimals is None:
                totals[mint].decimals = acc.decimals

        asset_map: dict[str, AssetDelta] = {}
        for mint, acc in totals.items():
            net = acc.net
            asset_map[mint] = AssetDelta(
                mint=mint,
                symbol=self._context.symbol_for(mint, acc.symbol),
                decimals=self._resolve_decimals(acc),
                delta=net,
                gross_in=acc.gross_in,
                gross_out=acc.gross_out,
                is_intermediate=abs(net) < self._context.dust_threshold,
                source=acc.source,
            )

        logger.debug(
            "Collected %d asset(s) for %s from transfers: %s",
            len(asset_map), swapper,
            {a.symbol: (str(a.delta), a.source.value) for a in asset_map.values()},
        )
        return asset_map

    def _from_transfers(self, transfers: Iterable[ItemizedTransfer], swapper: str) -> dict[str, _Accumulator]:
        totals: dict[str, _Accumulator] = {}
        for transfer in transfers:
            if swapper not in (transfer.from_owner, transfer.to_owner):
                continue
            if not transfer.is_well_formed:
                logger.warning(
                    "Skipping malformed transfer for %s: mint=%s amount=%s",
                    swapper, transfer.mint, transfer.amount,
                )
                continue
            # Self-transfers net to zero and would only inflate gross legs
            if transfer.from_owner == transfer.to_owner:
                continue

            acc = totals.get(transfer.mint)
            if acc is None:
                decimals = transfer.decimals
                if decimals is None and self._context.is_native(transfer.mint):
                    decimals = NATIVE_DECIMALS
                acc = _Accumulator(transfer.mint, decimals, None, DeltaSource.TOKEN_TRANSFERS)
                totals[transfer.mint] = acc
            elif acc.decimals is None and transfer.decimals is not None:
                acc.decimals = transfer.decimals

            if transfer.to_owner == swapper:
                acc.add(transfer.amount)
            else:
                acc.add(-transfer.amount)
        return totals

    def _native_fallback(self, economic: list[BalanceChange]) -> _Accumulator | None:
        native_changes = [
            c for c in economic if self._context.is_native(c.mint) and c.amount.is_finite()
        ]
        if not native_changes:
            return None
        acc = _Accumulator(self._context.native_mint, NATIVE_DECIMALS, None, DeltaSource.NATIVE_BALANCE)
        for change in native_changes:
            acc.add(change.amount)
        if abs(acc.net) < self._context.min_native_delta:
            logger.debug("Account-level native delta %s below minimum, ignored", acc.net)
            return None
        return acc

    def _from_account_data(self, economic: list[BalanceChange]) -> dict[str, _Accumulator]:
        totals: dict[str, _Accumulator] = {}
        for change in economic:
            if self._context.is_native(change.mint):
                continue
            if not change.is_well_formed:
                logger.warning(
                    "Skipping malformed account-level change: mint=%s amount=%s decimals=%s",
                    change.mint, change.amount, change.decimals,
                )
                continue
            acc = totals.get(change.mint)
            if acc is None:
                acc = _Accumulator(change.mint, change.decimals, change.symbol, DeltaSource.ACCOUNT_DATA)
                totals[change.mint] = acc
            acc.add(change.amount)
        return totals

    @staticmethod
    def _resolve_decimals(acc: _Accumulator) -> int:
        if acc.decimals is not None:
            return acc.decimals
        # Neither the transfer nor the account data named it: keep the precision observed
        return max(_observed_decimals(acc.gross_in), _observed_decimals(acc.gross_out))
