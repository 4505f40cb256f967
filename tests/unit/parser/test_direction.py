from decimal import Decimal

from swaptrace.domain.enums import TradeDirection
from swaptrace.parser.stages.direction import classify_direction
from swaptrace.parser.utils.addresses import NATIVE_MINT, USDC_MINT
from swaptrace.parser.utils.types import AssetDelta

TOKEN_A = "TokenAMint11111111111111111111111111111111"
TOKEN_B = "TokenBMint11111111111111111111111111111111"
JITO_SOL = "J1toso1uCk3RLmjorhTtrVwY9HJ7X8V9yYac6Y7kGCPn"


def _make_asset(mint: str, delta: str) -> AssetDelta:
    return AssetDelta(mint=mint, symbol=mint[:4], decimals=6, delta=Decimal(delta))


class TestClassifyDirection:
    def test_spending_native_for_token_is_buy(self, context):
        direction = classify_direction(_make_asset(NATIVE_MINT, "-2.5"), _make_asset(TOKEN_A, "1000"), context)
        assert direction == TradeDirection.BUY

    def test_receiving_stablecoin_for_token_is_sell(self, context):
        direction = classify_direction(_make_asset(TOKEN_A, "-1000"), _make_asset(USDC_MINT, "50"), context)
        assert direction == TradeDirection.SELL

    def test_native_outranks_stablecoin(self, context):
        direction = classify_direction(_make_asset(USDC_MINT, "-150"), _make_asset(NATIVE_MINT, "1"), context)
        assert direction == TradeDirection.SELL

    def test_other_core_outranks_plain_token(self, context):
        assert classify_direction(
            _make_asset(JITO_SOL, "-1"), _make_asset(TOKEN_A, "10"), context,
        ) == TradeDirection.BUY
        assert classify_direction(
            _make_asset(TOKEN_A, "-10"), _make_asset(JITO_SOL, "1"), context,
        ) == TradeDirection.SELL

    def test_equal_rank_is_buy(self, context):
        direction = classify_direction(_make_asset(TOKEN_A, "-500"), _make_asset(TOKEN_B, "300"), context)
        assert direction == TradeDirection.BUY
