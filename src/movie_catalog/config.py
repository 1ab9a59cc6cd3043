"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App settings
    app_name: str = "Movie Catalog API"
    debug: bool = False
    secret_key: str  # Required, no default

    # Database
    database_url: str = "sqlite+aiosqlite:///./movie_catalog.db"

    # OMDb API
    omdb_api_key: str = ""
    omdb_base_url: str = "https://www.omdbapi.com"
    omdb_timeout: float = 10.0
    omdb_plot: str = "full"

    # Bearer token verification
    jwt_algorithm: str = "HS256"
    admin_role: str = "admin"

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str, info) -> str:
        """Validate that secret_key is secure."""
        if not v:
            raise ValueError("SECRET_KEY is required")

        # In production mode, ensure secret key is strong
        debug = info.data.get("debug", False)
        if not debug:
            if len(v) < 32:
                raise ValueError("SECRET_KEY must be at least 32 characters in production mode")
            if v in ("change-me-in-production", "secret", "password", "changeme"):
                raise ValueError("SECRET_KEY must not be a common weak value")

        return v

    @field_validator("omdb_plot")
    @classmethod
    def validate_omdb_plot(cls, v: str) -> str:
        """OMDb only knows short and full plots."""
        if v not in ("short", "full"):
            raise ValueError("OMDB_PLOT must be 'short' or 'full'")
        return v

    def validate_runtime_config(self) -> list[str]:
        """Validate runtime configuration and return warnings."""
        warnings = []

        if not self.omdb_api_key:
            warnings.append("OMDB_API_KEY is not set - importing movies by IMDb id will fail")

        # Warn about debug mode in production
        if self.debug:
            warnings.append("DEBUG mode is enabled - should be disabled in production")

        return warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
