from enum import Enum


class EraseReason(str, Enum):
    """Terminal non-swap outcomes. Values are stable identifiers for downstream consumers."""

    INVALID_INPUT = "invalid_input"
    TRANSACTION_FAILED = "transaction_failed"
    NON_SWAP_TRANSACTION_TYPE = "non_swap_transaction_type"
    ONLY_TRANSFER_ACTIONS = "only_transfer_actions"
    NO_SWAPPER = "no_swapper"
    MULTIPLE_CANDIDATES = "multiple_candidates"
    SWAPPER_NO_DELTA = "swapper_no_delta"
    NO_OPPOSITE_DELTAS = "no_opposite_deltas"
    CORE_ONLY_SWAP = "core_only_swap"
