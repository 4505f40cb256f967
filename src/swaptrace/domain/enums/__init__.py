from swaptrace.domain.enums.confidence import Confidence, SwapperMethod, SwapperStrategy
from swaptrace.domain.enums.direction import TradeDirection
from swaptrace.domain.enums.erase_reason import EraseReason
from swaptrace.domain.enums.provider import DataProvider, DeltaSource, SplitReason

__all__ = [
    "Confidence",
    "DataProvider",
    "DeltaSource",
    "EraseReason",
    "SplitReason",
    "SwapperMethod",
    "SwapperStrategy",
    "TradeDirection",
]
