from decimal import Decimal
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Leave Ledger"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"
    database_url: str = "postgresql+asyncpg://leave_ledger:leave_ledger@db:5432/leave_ledger"
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:8000"]
    log_level: str = "INFO"
    # No migration tool ships with the service; tables are created at start-up.
    create_tables_on_startup: bool = True

    # Fallback entitlements used when neither an employee override nor a policy exists.
    default_day_entitlement: Decimal = Decimal(20)
    default_hour_entitlement: Decimal = Decimal(40)
    hours_per_day: Decimal = Decimal(8)

    default_daily_leave_type_name: str = "Daily Leave"
    default_hourly_leave_type_name: str = "Hourly Leave"

    # When enabled, reviewed requests can be re-decided and the ledger is reconciled.
    allow_re_review: bool = False


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
