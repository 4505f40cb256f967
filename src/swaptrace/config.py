from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict

from swaptrace.domain.enums import SwapperStrategy


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SWAPTRACE_", env_file=".env", extra="ignore")

    # Native-asset units (SOL)
    rent_threshold: Decimal = Decimal("0.01")
    epsilon: Decimal = Decimal("1e-9")
    dust_threshold: Decimal = Decimal("0.000001")
    intermediate_min_gross: Decimal = Decimal("0.01")
    min_native_delta: Decimal = Decimal("0.001")

    swapper_strategy: SwapperStrategy = SwapperStrategy.ESCALATION
    default_protocol: str = "unknown"
    suppress_core_swaps: bool = True

    # Comma-free JSON lists in env, e.g. SWAPTRACE_EXTRA_EXCLUDED_ADDRESSES='["Addr1","Addr2"]'
    extra_excluded_addresses: list[str] = []
    extra_priority_mints: list[str] = []


settings = Settings()
