"""Application configuration using pydantic settings."""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Router settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",  # Ignore extra environment variables not defined in Settings
    )

    # Provider credentials - each optional; a missing key disables that provider only
    OPENAI_API_KEY: Optional[str] = None
    GOOGLE_AI_API_KEY: Optional[str] = None
    ANTHROPIC_API_KEY: Optional[str] = None

    # Generation defaults - used when a call passes no temperature
    DEFAULT_TEMPERATURE: float = Field(default=0.7, ge=0.0, le=2.0)

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("OPENAI_API_KEY", "GOOGLE_AI_API_KEY", "ANTHROPIC_API_KEY", mode="before")
    @classmethod
    def blank_key_is_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def api_key_for(self, provider) -> Optional[str]:
        """Return the configured credential for a provider, or None."""
        name = getattr(provider, "value", provider)
        return {
            "openai": self.OPENAI_API_KEY,
            "google": self.GOOGLE_AI_API_KEY,
            "anthropic": self.ANTHROPIC_API_KEY,
        }.get(name)


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
