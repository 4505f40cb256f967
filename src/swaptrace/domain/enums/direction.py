from enum import Enum


class TradeDirection(str, Enum):
    """Side of a swap from the swapper's point of view."""

    BUY = "BUY"
    SELL = "SELL"
