"""lazyconvex configuration using pydantic-settings.

All configuration is strongly typed and supports environment variables
and .env files.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Kernel settings loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"  # "console" or "json"

    # Half-space intersection: multiplier search in rho(d - lambda*a, X) + lambda*b
    LINE_SEARCH_XATOL: float = Field(default=1e-9, gt=0.0)
    LINE_SEARCH_MAX_DOUBLINGS: int = Field(default=60, ge=1)

    # Epsilon-close polygon refinement
    REFINEMENT_MAX_DIRECTIONS: int = Field(default=4096, ge=4)


# Singleton instance for import convenience
settings = Settings()
