"""ClassifierContext: read-only static tables and thresholds shared by every pipeline run."""

from collections.abc import Callable, Iterable
from decimal import Decimal

from swaptrace.config import Settings
from swaptrace.domain.enums import SwapperStrategy
from swaptrace.parser.utils.addresses import (
    KNOWN_AMM_POOLS,
    KNOWN_SYMBOLS,
    NATIVE_MINT,
    OTHER_CORE_MINTS,
    STABLECOIN_MINTS,
    SYSTEM_ACCOUNTS,
    short_mint,
)

AddressPredicate = Callable[[str], bool]

# Priority ranks: higher ranks are quote-grade
RANK_NATIVE = 3
RANK_STABLECOIN = 2
RANK_OTHER_CORE = 1
RANK_NON_PRIORITY = 0


def never_program_derived(address: str) -> bool:
    """Default PDA predicate: no special detection."""
    return False


class ClassifierContext:
    """Immutable configuration built once at startup and passed into every stage.

    Holds no per-transaction state, so one instance can serve concurrent classifications.
    """

    __slots__ = (
        "_excluded",
        "_stablecoins",
        "_other_core",
        "_is_program_derived",
        "native_mint",
        "rent_threshold",
        "epsilon",
        "dust_threshold",
        "intermediate_min_gross",
        "min_native_delta",
        "swapper_strategy",
        "default_protocol",
        "suppress_core_swaps",
    )

    def __init__(
        self,
        *,
        native_mint: str = NATIVE_MINT,
        stablecoin_mints: Iterable[str] = STABLECOIN_MINTS,
        other_core_mints: Iterable[str] = OTHER_CORE_MINTS,
        excluded_addresses: Iterable[str] = SYSTEM_ACCOUNTS | KNOWN_AMM_POOLS,
        rent_threshold: Decimal = Decimal("0.01"),
        epsilon: Decimal = Decimal("1e-9"),
        dust_threshold: Decimal = Decimal("0.000001"),
        intermediate_min_gross: Decimal = Decimal("0.01"),
        min_native_delta: Decimal = Decimal("0.001"),
        swapper_strategy: SwapperStrategy = SwapperStrategy.ESCALATION,
        default_protocol: str = "unknown",
        suppress_core_swaps: bool = True,
        is_program_derived: AddressPredicate = never_program_derived,
    ) -> None:
        self.native_mint = native_mint
        self._stablecoins: frozenset[str] = frozenset(stablecoin_mints)
        self._other_core: frozenset[str] = frozenset(other_core_mints)
        self._excluded: frozenset[str] = frozenset(excluded_addresses)
        self._is_program_derived = is_program_derived
        self.rent_threshold = rent_threshold
        self.epsilon = epsilon
        self.dust_threshold = dust_threshold
        self.intermediate_min_gross = intermediate_min_gross
        self.min_native_delta = min_native_delta
        self.swapper_strategy = swapper_strategy
        self.default_protocol = default_protocol
        self.suppress_core_swaps = suppress_core_swaps

    def is_native(self, mint: str) -> bool:
        return mint == self.native_mint

    def is_excluded(self, address: str) -> bool:
        """System/program/pool addresses that can never be the swapper."""
        return address in self._excluded or self._is_program_derived(address)

    def priority_rank(self, mint: str) -> int:
        if mint == self.native_mint:
            return RANK_NATIVE
        if mint in self._stablecoins:
            return RANK_STABLECOIN
        if mint in self._other_core:
            return RANK_OTHER_CORE
        return RANK_NON_PRIORITY

    def is_priority(self, mint: str) -> bool:
        return self.priority_rank(mint) > RANK_NON_PRIORITY

    def is_quote_grade(self, mint: str) -> bool:
        """Native asset or a major stablecoin."""
        return self.priority_rank(mint) >= RANK_STABLECOIN

    def symbol_for(self, mint: str, hint: str | None = None) -> str:
        """Best-effort display symbol. Never authoritative."""
        if mint in KNOWN_SYMBOLS:
            return KNOWN_SYMBOLS[mint]
        if hint:
            return hint
        return short_mint(mint)


def build_classifier_context(
    settings: Settings,
    is_program_derived: AddressPredicate = never_program_derived,
) -> ClassifierContext:
    """Create a ClassifierContext from deployment settings."""
    return ClassifierContext(
        stablecoin_mints=STABLECOIN_MINTS | set(settings.extra_priority_mints),
        excluded_addresses=SYSTEM_ACCOUNTS | KNOWN_AMM_POOLS | set(settings.extra_excluded_addresses),
        rent_threshold=settings.rent_threshold,
        epsilon=settings.epsilon,
        dust_threshold=settings.dust_threshold,
        intermediate_min_gross=settings.intermediate_min_gross,
        min_native_delta=settings.min_native_delta,
        swapper_strategy=settings.swapper_strategy,
        default_protocol=settings.default_protocol,
        suppress_core_swaps=settings.suppress_core_swaps,
        is_program_derived=is_program_derived,
    )
