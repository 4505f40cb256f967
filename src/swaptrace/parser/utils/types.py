"""Core data types for the swap classification pipeline.

All types are transaction-scoped value objects: built once per run, frozen, never shared.
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from swaptrace.domain.enums import (
    Confidence,
    DeltaSource,
    EraseReason,
    SplitReason,
    SwapperMethod,
    TradeDirection,
)

# Anything above this is a millisecond timestamp
_MS_TIMESTAMP_CUTOFF = 10**12


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class BalanceChange(_Frozen):
    """One observed movement of one asset for one owner. amount is signed, human scale."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=True)

    mint: str
    owner: str
    amount: Decimal
    decimals: int | None = None  # None = provider omitted it; skipped during aggregation
    pre_balance: Decimal | None = None
    post_balance: Decimal | None = None
    address: str | None = None  # token account
    symbol: str | None = None

    @property
    def is_well_formed(self) -> bool:
        return self.decimals is not None and self.amount.is_finite()


class ItemizedTransfer(_Frozen):
    """A transfer between two named owners. amount is unsigned, human scale."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=True)

    mint: str
    from_owner: str = ""
    to_owner: str = ""
    amount: Decimal
    decimals: int | None = None

    @property
    def is_well_formed(self) -> bool:
        return self.amount.is_finite() and self.amount >= 0


class SwapTransaction(_Frozen):
    """Provider-neutral transaction input for the balance-change variant."""

    signature: str
    timestamp: int = 0  # seconds since epoch
    fee_payer: str
    signers: tuple[str, ...] = ()
    balance_changes: tuple[BalanceChange, ...] = ()
    # Native transfers reported outside balance_changes (e.g. bonding-curve SOL legs)
    native_transfers: tuple[ItemizedTransfer, ...] = ()
    # Signed legs a provider SWAP action attributes to its swapper
    action_swap_legs: tuple[BalanceChange, ...] = ()
    action_types: tuple[str, ...] = ()  # provider action labels, in payload order
    protocol: str | None = None
    status: str | None = None  # None = provider did not say; treated as success
    type: str | None = None  # provider label, advisory only

    @field_validator("timestamp")
    @classmethod
    def _to_seconds(cls, value: int) -> int:
        if value > _MS_TIMESTAMP_CUTOFF:
            return value // 1000
        return value


class TransferTransaction(SwapTransaction):
    """Input for the itemized-transfer variant. balance_changes hold account-level deltas."""

    transfers: tuple[ItemizedTransfer, ...] = ()


class FilteredChanges(_Frozen):
    """Swapper-owned changes split into economic legs and rent-refund noise."""

    economic: tuple[BalanceChange, ...] = ()
    non_economic: tuple[BalanceChange, ...] = ()

    @property
    def rent_refunds_filtered(self) -> bool:
        return len(self.non_economic) > 0


class SwapperResult(_Frozen):
    swapper: str | None = None
    confidence: Confidence = Confidence.LOW
    method: SwapperMethod = SwapperMethod.ERASE
    candidates: tuple[str, ...] = ()  # owners still in contention when resolution failed

    @property
    def resolved(self) -> bool:
        return self.swapper is not None and self.method != SwapperMethod.ERASE


class AssetDelta(_Frozen):
    """Net movement of one mint within a transaction. Keyed by mint, one per mint."""

    mint: str
    symbol: str
    decimals: int
    delta: Decimal
    gross_in: Decimal = Decimal(0)
    gross_out: Decimal = Decimal(0)
    is_intermediate: bool = False
    source: DeltaSource = DeltaSource.BALANCE_CHANGES


class SplitDetectionResult(_Frozen):
    split_required: bool
    entry_asset: AssetDelta  # delta < 0, checked by OutputGenerator
    exit_asset: AssetDelta  # delta > 0, checked by OutputGenerator
    split_reason: SplitReason | None = None
    routing_asset: AssetDelta | None = None


class AssetRef(_Frozen):
    mint: str
    symbol: str
    decimals: int


class SwapAmounts(_Frozen):
    """Unsigned, decimal-scaled magnitudes."""

    base_amount: Decimal
    quote_amount: Decimal


class ParsedSwap(_Frozen):
    """Canonical swap record consumed by alerting and persistence."""

    signature: str
    timestamp: int
    swapper: str
    confidence: Confidence
    swapper_method: SwapperMethod
    protocol: str
    direction: TradeDirection
    base_asset: AssetRef
    quote_asset: AssetRef
    amounts: SwapAmounts
    rent_refunds_filtered: bool = False
    intermediate_assets_collapsed: bool = False
    split_reason: SplitReason | None = None


class EraseResult(_Frozen):
    """Terminal non-swap outcome."""

    signature: str
    timestamp: int = 0
    reason: EraseReason
    debug_info: dict[str, Any] = {}


class SwapMetadata(_Frozen):
    """Provenance carried from earlier stages into the output records."""

    protocol: str
    rent_refunds_filtered: bool = False
    intermediate_assets_collapsed: bool = False


class ClassificationResult(_Frozen):
    """Result wrapper: 0-2 swaps, or a single erase."""

    swaps: tuple[ParsedSwap, ...] = ()
    erase: EraseResult | None = None

    @property
    def success(self) -> bool:
        return self.erase is None and len(self.swaps) > 0
