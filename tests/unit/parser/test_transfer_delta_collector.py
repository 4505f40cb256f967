"""Tests for aggregation from itemized transfers with account-level fallback."""

from decimal import Decimal

from swaptrace.domain.enums import DeltaSource
from swaptrace.parser.stages.deltas import TransferDeltaCollector
from swaptrace.parser.utils.addresses import NATIVE_MINT
from swaptrace.parser.utils.types import BalanceChange, ItemizedTransfer

SWAPPER = "SwapperWa11et111111111111111111111111111111"
POOL = "PoolVau1t11111111111111111111111111111111111"
STRANGER = "Stranger1111111111111111111111111111111111"
TOKEN_X = "TokenXMint11111111111111111111111111111111"
TOKEN_Y = "TokenYMint11111111111111111111111111111111"


def _make_transfer(mint: str, amount: str, outgoing: bool, decimals: int | None = None) -> ItemizedTransfer:
    if outgoing:
        return ItemizedTransfer(mint=mint, from_owner=SWAPPER, to_owner=POOL, amount=Decimal(amount), decimals=decimals)
    return ItemizedTransfer(mint=mint, from_owner=POOL, to_owner=SWAPPER, amount=Decimal(amount), decimals=decimals)


def _make_change(mint: str, amount: str, decimals: int = 6) -> BalanceChange:
    return BalanceChange(mint=mint, owner=SWAPPER, amount=Decimal(amount), decimals=decimals)


class TestNativeAsset:
    def test_transfer_records_preferred_over_account_delta(self, context):
        transfers = [_make_transfer(NATIVE_MINT, "2.5", outgoing=True)]
        economic = [_make_change(NATIVE_MINT, "-2.500005", decimals=9)]
        sol = TransferDeltaCollector(context).collect(transfers, economic, SWAPPER)[NATIVE_MINT]

        assert sol.delta == Decimal("-2.5")
        assert sol.decimals == 9
        assert sol.source == DeltaSource.TOKEN_TRANSFERS

    def test_account_delta_used_when_no_transfer_touches_swapper(self, context):
        transfers = [
            ItemizedTransfer(mint=NATIVE_MINT, from_owner=STRANGER, to_owner=POOL, amount=Decimal("3")),
            _make_transfer(TOKEN_X, "1000", outgoing=False),
        ]
        economic = [_make_change(NATIVE_MINT, "-1.2", decimals=9)]
        sol = TransferDeltaCollector(context).collect(transfers, economic, SWAPPER)[NATIVE_MINT]

        assert sol.delta == Decimal("-1.2")
        assert sol.source == DeltaSource.NATIVE_BALANCE

    def test_account_delta_below_minimum_ignored(self, context):
        economic = [_make_change(NATIVE_MINT, "-0.0000005", decimals=9)]
        asset_map = TransferDeltaCollector(context).collect([], economic, SWAPPER)

        assert NATIVE_MINT not in asset_map

    def test_transaction_fee_alone_is_not_a_native_leg(self, context):
        economic = [_make_change(NATIVE_MINT, "-0.000005", decimals=9)]
        asset_map = TransferDeltaCollector(context).collect([_make_transfer(TOKEN_X, "100", outgoing=False)], economic, SWAPPER)

        assert NATIVE_MINT not in asset_map
        assert list(asset_map) == [TOKEN_X]


class TestTokenAssets:
    def test_transfers_first_then_account_data_for_missing_mints(self, context):
        transfers = [_make_transfer(TOKEN_X, "1000", outgoing=False)]
        economic = [_make_change(TOKEN_X, "999"), _make_change(TOKEN_Y, "-5", decimals=8)]
        asset_map = TransferDeltaCollector(context).collect(transfers, economic, SWAPPER)

        assert asset_map[TOKEN_X].delta == Decimal("1000")
        assert asset_map[TOKEN_X].source == DeltaSource.TOKEN_TRANSFERS
        # decimals borrowed from the account-level record
        assert asset_map[TOKEN_X].decimals == 6
        assert asset_map[TOKEN_Y].delta == Decimal("-5")
        assert asset_map[TOKEN_Y].source == DeltaSource.ACCOUNT_DATA

    def test_unknown_decimals_inferred_from_amount(self, context):
        transfers = [_make_transfer(TOKEN_X, "12.345", outgoing=False)]
        token = TransferDeltaCollector(context).collect(transfers, [], SWAPPER)[TOKEN_X]

        assert token.decimals == 3

    def test_transfers_between_other_accounts_ignored(self, context):
        transfers = [ItemizedTransfer(mint=TOKEN_X, from_owner=POOL, to_owner=STRANGER, amount=Decimal("7"))]
        assert TransferDeltaCollector(context).collect(transfers, [], SWAPPER) == {}

    def test_negative_transfer_amount_skipped(self, context):
        transfers = [_make_transfer(TOKEN_X, "-7", outgoing=False)]
        assert TransferDeltaCollector(context).collect(transfers, [], SWAPPER) == {}


class TestDustIntermediates:
    def test_routing_residue_is_intermediate(self, context):
        transfers = [
            _make_transfer(NATIVE_MINT, "10", outgoing=False),
            _make_transfer(NATIVE_MINT, "10.0000005", outgoing=True),
        ]
        sol = TransferDeltaCollector(context).collect(transfers, [], SWAPPER)[NATIVE_MINT]

        assert sol.is_intermediate is True
        assert sol.gross_in == Decimal("10")
        assert sol.gross_out == Decimal("10.0000005")

    def test_net_above_dust_is_tradable(self, context):
        transfers = [_make_transfer(TOKEN_X, "10", outgoing=False), _make_transfer(TOKEN_X, "9", outgoing=True)]
        token = TransferDeltaCollector(context).collect(transfers, [], SWAPPER)[TOKEN_X]

        assert token.is_intermediate is False
        assert token.delta == Decimal("1")
