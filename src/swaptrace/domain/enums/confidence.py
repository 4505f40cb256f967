from enum import Enum


class Confidence(str, Enum):
    """Trust tier of a swapper identification. LOW records are advisory only."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SwapperMethod(str, Enum):
    """Which heuristic resolved the swapper."""

    FEE_PAYER = "fee_payer"
    SIGNER = "signer"
    OWNER_ANALYSIS = "owner_analysis"
    LARGEST_DELTA = "largest_delta"
    ERASE = "erase"


class SwapperStrategy(str, Enum):
    """Deployment-wide choice of swapper identification heuristic."""

    ESCALATION = "escalation"
    LARGEST_DELTA = "largest_delta"
