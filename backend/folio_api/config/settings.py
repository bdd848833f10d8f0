"""Application configuration and environment helpers."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TIMEZONE = "America/New_York"
DEFAULT_BENCHMARK_SYMBOL = "^GSPC"


class AppSettings(BaseSettings):
    """Configuration options for the performance service."""

    app_name: str = Field(default="Folio Performance Service")
    log_level: str = Field(default="INFO", description="Root log level name.")
    timezone: str = Field(default=DEFAULT_TIMEZONE, description="Timezone used to resolve today's date.")

    benchmark_symbol: str = Field(
        default=DEFAULT_BENCHMARK_SYMBOL,
        description="Index the portfolio is compared against.",
    )

    price_provider: Literal["alpha_vantage", "price_service"] = Field(default="alpha_vantage")
    alphavantage_api_key: str | None = Field(default=None)
    alphavantage_requests_per_minute: int = Field(default=5)
    price_service_url: str | None = Field(
        default=None,
        description="Base URL of the historical price bridge.",
    )
    price_service_timeout_seconds: float = Field(default=15.0)

    ledger_service_url: str = Field(
        default="http://localhost:8200",
        description="Base URL for the ledger service owning accounts and transactions.",
    )
    ledger_service_token: str | None = Field(
        default=None,
        description="Optional shared secret for ledger service authentication",
    )
    ledger_service_timeout_seconds: float = Field(default=15.0)

    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:5173"])

    telemetry_enabled: bool = Field(default=False)
    telemetry_service_name: str = Field(default="folio-performance")
    telemetry_otlp_endpoint: str | None = Field(default=None)
    telemetry_otlp_insecure: bool = Field(default=True)
    telemetry_sample_ratio: float = Field(default=1.0, ge=0.0, le=1.0)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    def dict_for_logging(self) -> dict[str, Any]:
        """Return a sanitized dict for logging purposes."""

        hidden = {"alphavantage_api_key", "ledger_service_token"}
        return {k: ("***" if k in hidden and v else v) for k, v in self.model_dump().items()}


@lru_cache(maxsize=1)
def get_settings(**overrides: Any) -> AppSettings:
    """Return cached application settings with optional overrides."""

    if overrides:
        return AppSettings(**overrides)
    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_TIMEZONE",
    "DEFAULT_BENCHMARK_SYMBOL",
    "get_settings",
]
