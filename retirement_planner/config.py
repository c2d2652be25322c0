"""Application configuration using Pydantic settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Retirement Planner"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # development, staging, production

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"  # 'text' or 'json' (json for production)

    # Jurisdiction defaults (used when a request omits them)
    DEFAULT_JURISDICTION: str = "US"

    # Simulation
    # Share of every taxable-brokerage withdrawal treated as realised gain
    TAXABLE_GAIN_FRACTION: float = 0.50
    # Balances at or below this are treated as depleted
    BALANCE_EPSILON: float = 0.01
    MAX_PLANNING_AGE: int = 120

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @field_validator("TAXABLE_GAIN_FRACTION")
    @classmethod
    def validate_gain_fraction(cls, v: float) -> float:
        """Gain fraction is a share of the withdrawal, so it must sit in [0, 1]."""
        if not 0 <= v <= 1:
            raise ValueError("TAXABLE_GAIN_FRACTION must be between 0 and 1")
        return v

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("text", "json"):
            raise ValueError("LOG_FORMAT must be 'text' or 'json'")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
