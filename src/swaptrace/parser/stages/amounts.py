"""Amount normalization into (base, quote) magnitudes."""

from decimal import ROUND_HALF_EVEN, Context, Decimal

from swaptrace.domain.enums import TradeDirection
from swaptrace.parser.utils.types import AssetDelta, SwapAmounts

# Wide enough for any u64 raw amount at any token precision
_QUANTIZE_CONTEXT = Context(prec=80, rounding=ROUND_HALF_EVEN)


def scale_magnitude(asset: AssetDelta) -> Decimal:
    """Unsigned delta rounded to the asset's own decimals."""
    quantum = Decimal(1).scaleb(-asset.decimals)
    return asset.delta.copy_abs().quantize(quantum, context=_QUANTIZE_CONTEXT)


def normalize_amounts(entry: AssetDelta, exit: AssetDelta, direction: TradeDirection) -> SwapAmounts:
    """BUY: base = exit (received), quote = entry (spent). SELL: base = entry, quote = exit."""
    if direction == TradeDirection.BUY:
        base, quote = exit, entry
    else:
        base, quote = entry, exit
    return SwapAmounts(base_amount=scale_magnitude(base), quote_amount=scale_magnitude(quote))
