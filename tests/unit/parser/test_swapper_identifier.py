"""Tests for both swapper identification strategies."""

from decimal import Decimal

from swaptrace.domain.enums import Confidence, SwapperMethod, SwapperStrategy
from swaptrace.parser.stages.swapper import (
    EscalationSwapperIdentifier,
    LargestDeltaSwapperIdentifier,
    build_swapper_identifier,
)
from swaptrace.parser.utils.addresses import NATIVE_MINT, TOKEN_PROGRAM, USDC_MINT
from swaptrace.parser.utils.context import ClassifierContext
from swaptrace.parser.utils.types import BalanceChange

FEE_PAYER = "FeePayer111111111111111111111111111111111111"
SIGNER = "Signer22222222222222222222222222222222222222"
WALLET_A = "WalletA3333333333333333333333333333333333333"
WALLET_B = "WalletB4444444444444444444444444444444444444"
RAYDIUM_POOL = "675kPX9MHTjS2zt1qfr1NYHuzeLXfQM9H24wFSUt1Mp8"
TOKEN_X = "TokenXMint11111111111111111111111111111111"


def _make_change(owner: str, mint: str, amount: str, decimals: int | None = 6) -> BalanceChange:
    return BalanceChange(mint=mint, owner=owner, amount=Decimal(amount), decimals=decimals)


def _make_swap(owner: str) -> list[BalanceChange]:
    """owner spends 1 SOL for 100 TokenX against a Raydium pool."""
    return [
        _make_change(owner, NATIVE_MINT, "-1", decimals=9),
        _make_change(owner, TOKEN_X, "100"),
        _make_change(RAYDIUM_POOL, NATIVE_MINT, "1", decimals=9),
        _make_change(RAYDIUM_POOL, TOKEN_X, "-100"),
    ]


class TestEscalationSwapperIdentifier:
    def test_fee_payer_with_delta_is_high_confidence(self, context):
        result = EscalationSwapperIdentifier(context).identify(FEE_PAYER, [SIGNER], _make_swap(FEE_PAYER))

        assert result.swapper == FEE_PAYER
        assert result.confidence == Confidence.HIGH
        assert result.method == SwapperMethod.FEE_PAYER
        assert result.resolved is True

    def test_primary_signer_when_fee_payer_has_no_delta(self, context):
        result = EscalationSwapperIdentifier(context).identify(FEE_PAYER, [SIGNER, WALLET_A], _make_swap(SIGNER))

        assert result.swapper == SIGNER
        assert result.confidence == Confidence.MEDIUM
        assert result.method == SwapperMethod.SIGNER

    def test_only_primary_signer_is_considered(self, context):
        result = EscalationSwapperIdentifier(context).identify(FEE_PAYER, [SIGNER, WALLET_A], _make_swap(WALLET_A))

        # Falls through to owner analysis: WALLET_A is the only non-pool owner
        assert result.swapper == WALLET_A
        assert result.method == SwapperMethod.OWNER_ANALYSIS
        assert result.confidence == Confidence.LOW

    def test_single_non_system_owner(self, context):
        changes = _make_swap(WALLET_A) + [_make_change(TOKEN_PROGRAM, NATIVE_MINT, "0.001", decimals=9)]
        result = EscalationSwapperIdentifier(context).identify(FEE_PAYER, [], changes)

        assert result.swapper == WALLET_A
        assert result.method == SwapperMethod.OWNER_ANALYSIS

    def test_multiple_candidates_erase(self, context):
        changes = _make_swap(WALLET_B) + _make_swap(WALLET_A)
        result = EscalationSwapperIdentifier(context).identify(FEE_PAYER, [], changes)

        assert result.resolved is False
        assert result.method == SwapperMethod.ERASE
        assert result.swapper is None
        assert result.candidates == (WALLET_A, WALLET_B)

    def test_only_pools_gives_no_candidates(self, context):
        changes = [_make_change(RAYDIUM_POOL, TOKEN_X, "5")]
        result = EscalationSwapperIdentifier(context).identify(FEE_PAYER, [], changes)

        assert result.resolved is False
        assert result.candidates == ()

    def test_zero_and_malformed_changes_do_not_count(self, context):
        changes = [
            _make_change(FEE_PAYER, TOKEN_X, "0"),
            _make_change(SIGNER, TOKEN_X, "5", decimals=None),
            _make_change(WALLET_A, TOKEN_X, "5"),
        ]
        result = EscalationSwapperIdentifier(context).identify(FEE_PAYER, [SIGNER], changes)

        assert result.swapper == WALLET_A

    def test_program_derived_predicate_excludes_owner(self):
        context = ClassifierContext(is_program_derived=lambda address: address == WALLET_B)
        changes = _make_swap(WALLET_A) + _make_swap(WALLET_B)
        result = EscalationSwapperIdentifier(context).identify(FEE_PAYER, [], changes)

        assert result.swapper == WALLET_A


class TestLargestDeltaSwapperIdentifier:
    def test_largest_total_wins_and_pools_are_ignored(self, largest_delta_context):
        changes = [
            _make_change(WALLET_A, TOKEN_X, "-100"),
            _make_change(WALLET_B, TOKEN_X, "-50"),
            _make_change(RAYDIUM_POOL, TOKEN_X, "150000"),
        ]
        result = LargestDeltaSwapperIdentifier(largest_delta_context).identify(FEE_PAYER, [], changes)

        assert result.swapper == WALLET_A
        assert result.confidence == Confidence.HIGH
        assert result.method == SwapperMethod.LARGEST_DELTA

    def test_tie_prefers_unique_non_core_mover(self, largest_delta_context):
        changes = [
            _make_change(WALLET_A, NATIVE_MINT, "-1", decimals=9),
            _make_change(WALLET_A, USDC_MINT, "1"),
            _make_change(WALLET_B, TOKEN_X, "-1"),
            _make_change(WALLET_B, NATIVE_MINT, "1", decimals=9),
        ]
        result = LargestDeltaSwapperIdentifier(largest_delta_context).identify(FEE_PAYER, [], changes)

        assert result.swapper == WALLET_B
        assert result.confidence == Confidence.MEDIUM

    def test_unbroken_tie_falls_back_to_fee_payer(self, largest_delta_context):
        changes = [_make_change(FEE_PAYER, TOKEN_X, "-10"), _make_change(WALLET_A, TOKEN_X, "10")]
        result = LargestDeltaSwapperIdentifier(largest_delta_context).identify(FEE_PAYER, [], changes)

        assert result.swapper == FEE_PAYER
        assert result.confidence == Confidence.LOW
        assert result.method == SwapperMethod.FEE_PAYER

    def test_unbroken_tie_without_fee_payer_erases(self, largest_delta_context):
        changes = [_make_change(WALLET_B, TOKEN_X, "-10"), _make_change(WALLET_A, TOKEN_X, "10")]
        result = LargestDeltaSwapperIdentifier(largest_delta_context).identify(FEE_PAYER, [], changes)

        assert result.resolved is False
        assert result.candidates == (WALLET_A, WALLET_B)

    def test_no_movers_erases(self, largest_delta_context):
        result = LargestDeltaSwapperIdentifier(largest_delta_context).identify(FEE_PAYER, [], [])

        assert result.resolved is False
        assert result.candidates == ()


class TestBuildSwapperIdentifier:
    def test_default_is_escalation(self, context):
        assert isinstance(build_swapper_identifier(context), EscalationSwapperIdentifier)

    def test_largest_delta_selected(self):
        context = ClassifierContext(swapper_strategy=SwapperStrategy.LARGEST_DELTA)
        assert isinstance(build_swapper_identifier(context), LargestDeltaSwapperIdentifier)
