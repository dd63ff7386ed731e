"""
Application configuration using Pydantic Settings.

Automatically loads environment variables from .env files.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_STRIPE_AMOUNT = 1000
PRICE_ID_PREFIX = "price_"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # OpenAI
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o"
    openai_timeout: float = 60.0

    # Stripe
    stripe_secret_key: str | None = None
    stripe_price_id: str | None = None
    stripe_amount: int = DEFAULT_STRIPE_AMOUNT  # smallest currency unit
    stripe_currency: str = "usd"
    stripe_timeout: float = 30.0

    # Server
    domain: str | None = None
    port: int = 5001
    upload_dir: Path = Path(__file__).parent / "uploads"

    # Debug flags
    debug: bool = False

    model_config = SettingsConfigDict(
        # Load from .env file in the backend directory
        env_file=Path(__file__).parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        # Case insensitive environment variable names
        case_sensitive=False,
    )

    @field_validator("stripe_amount", mode="before")
    @classmethod
    def default_invalid_amount(cls, v: object) -> int:
        """Fall back to the default amount for empty, zero or unparsable values."""
        try:
            amount = int(v)
        except (TypeError, ValueError):
            return DEFAULT_STRIPE_AMOUNT
        return amount if amount > 0 else DEFAULT_STRIPE_AMOUNT

    @field_validator("stripe_currency", mode="before")
    @classmethod
    def default_blank_currency(cls, v: object) -> object:
        return v or "usd"

    @property
    def public_domain(self) -> str:
        """Base URL used for checkout redirects."""
        return (self.domain or f"http://localhost:{self.port}").rstrip("/")

    @property
    def configured_price_id(self) -> str | None:
        """The Stripe price ID, only when it looks like one."""
        if self.stripe_price_id and self.stripe_price_id.startswith(PRICE_ID_PREFIX):
            return self.stripe_price_id
        return None


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration loaded from environment.
    """
    return Settings()
