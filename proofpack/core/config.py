"""Configuration management for the Proof Pack Health service."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file (only if accessible)
try:
    load_dotenv()
except (PermissionError, OSError):
    # In sandboxed environments, .env might not be accessible
    # Environment variables should be set directly
    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Scoring semantics (categories, weights, eligibility threshold) are not
    environment-driven; they live in PackHealthConfig.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Environment
    PROOFPACK_ENV: str = Field(default="dev", description="Environment: dev, staging, prod")

    # API
    API_TITLE: str = Field(default="Proof Pack Health Engine", description="OpenAPI title")
    MAX_DOCUMENTS_PER_REQUEST: int = Field(
        default=500, ge=1, description="Max documents accepted in a single scoring request"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance

    Raises:
        ValidationError: If environment variables hold invalid values
    """
    return Settings()
