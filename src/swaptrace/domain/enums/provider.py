from enum import Enum


class DataProvider(str, Enum):
    """Ledger-indexing providers whose payloads we can classify. Values lowercase to match config."""

    SHYFT = "shyft"
    HELIUS = "helius"


class DeltaSource(str, Enum):
    """Which data shape an aggregated asset delta came from."""

    BALANCE_CHANGES = "balance_changes"
    TOKEN_TRANSFERS = "token_transfers"
    ACCOUNT_DATA = "account_data"
    NATIVE_BALANCE = "native_balance"
    # Core leg recovered from another owner when the swapper's own record is missing
    COUNTERPARTY = "counterparty"


class SplitReason(str, Enum):
    ROUTED_THROUGH_INTERMEDIATE = "routed_through_intermediate"
    TOKEN_TO_TOKEN_UNSTABLE_PAIR = "token_to_token_unstable_pair"
