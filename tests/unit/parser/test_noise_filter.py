"""Tests for rent-refund noise filtering."""

from decimal import Decimal

from swaptrace.parser.stages.noise_filter import RentNoiseFilter
from swaptrace.parser.utils.addresses import NATIVE_MINT
from swaptrace.parser.utils.context import ClassifierContext
from swaptrace.parser.utils.types import BalanceChange

SWAPPER = "SwapperWa11et111111111111111111111111111111"
OTHER = "OtherWa11et1111111111111111111111111111111"
TOKEN_X = "TokenXMint11111111111111111111111111111111"


def _make_change(mint: str, amount: str, owner: str = SWAPPER, decimals: int | None = 9) -> BalanceChange:
    return BalanceChange(mint=mint, owner=owner, amount=Decimal(amount), decimals=decimals)


class TestRentNoiseFilter:
    def test_small_native_inflow_with_token_activity_is_rent(self, context):
        changes = [_make_change(NATIVE_MINT, "0.00203928"), _make_change(TOKEN_X, "-100", decimals=6)]
        result = RentNoiseFilter(context).filter(changes, SWAPPER)

        assert [c.mint for c in result.economic] == [TOKEN_X]
        assert [c.mint for c in result.non_economic] == [NATIVE_MINT]
        assert result.rent_refunds_filtered is True

    def test_native_only_inflow_is_kept(self, context):
        changes = [_make_change(NATIVE_MINT, "0.002")]
        result = RentNoiseFilter(context).filter(changes, SWAPPER)

        assert len(result.economic) == 1
        assert result.rent_refunds_filtered is False

    def test_negative_native_is_never_rent(self, context):
        changes = [_make_change(NATIVE_MINT, "-0.002"), _make_change(TOKEN_X, "100", decimals=6)]
        result = RentNoiseFilter(context).filter(changes, SWAPPER)

        assert len(result.economic) == 2
        assert result.non_economic == ()

    def test_threshold_is_exclusive(self, context):
        changes = [_make_change(NATIVE_MINT, "0.01"), _make_change(TOKEN_X, "-5", decimals=6)]
        result = RentNoiseFilter(context).filter(changes, SWAPPER)

        assert len(result.economic) == 2

    def test_large_native_inflow_is_kept(self, context):
        changes = [_make_change(NATIVE_MINT, "0.5"), _make_change(TOKEN_X, "-5", decimals=6)]
        result = RentNoiseFilter(context).filter(changes, SWAPPER)

        assert {c.mint for c in result.economic} == {NATIVE_MINT, TOKEN_X}

    def test_other_owners_dropped_from_both_partitions(self, context):
        changes = [
            _make_change(NATIVE_MINT, "0.002", owner=OTHER),
            _make_change(TOKEN_X, "5", owner=OTHER, decimals=6),
            _make_change(TOKEN_X, "-5", decimals=6),
        ]
        result = RentNoiseFilter(context).filter(changes, SWAPPER)

        assert all(c.owner == SWAPPER for c in result.economic + result.non_economic)
        assert len(result.economic) == 1

    def test_nan_amount_does_not_raise(self, context):
        changes = [_make_change(NATIVE_MINT, "NaN"), _make_change(TOKEN_X, "-5", decimals=6)]
        result = RentNoiseFilter(context).filter(changes, SWAPPER)

        assert len(result.economic) == 2
        assert result.non_economic == ()

    def test_threshold_comes_from_context(self):
        context = ClassifierContext(rent_threshold=Decimal("0.001"))
        changes = [_make_change(NATIVE_MINT, "0.002"), _make_change(TOKEN_X, "-5", decimals=6)]
        result = RentNoiseFilter(context).filter(changes, SWAPPER)

        assert result.rent_refunds_filtered is False

    def test_activity_outside_changes_counts_as_token_movement(self, context):
        changes = [_make_change(NATIVE_MINT, "0.00203928")]
        activity = [_make_change(TOKEN_X, "-100", decimals=6)]
        result = RentNoiseFilter(context).filter(changes, SWAPPER, activity=activity)

        assert result.economic == ()
        assert [c.mint for c in result.non_economic] == [NATIVE_MINT]

    def test_activity_of_other_owners_ignored(self, context):
        changes = [_make_change(NATIVE_MINT, "0.00203928")]
        activity = [_make_change(TOKEN_X, "-100", owner=OTHER, decimals=6)]
        result = RentNoiseFilter(context).filter(changes, SWAPPER, activity=activity)

        assert result.rent_refunds_filtered is False
