"""Application configuration using pydantic-settings."""
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Database - required, there is deliberately no fallback connection string
    database_url: str

    # Server
    host: str = Field(default="127.0.0.1", validation_alias="HOST")
    port: int = Field(default=3000, validation_alias="PORT")
    api_prefix: str = Field(default="/api", validation_alias="API_PREFIX")

    # CORS - comma-separated list of allowed origins (stored as string, parsed via property)
    cors_origins_str: str = Field(default="*", validation_alias="CORS_ORIGINS")

    # Admin gating for create/update/delete
    auth_enabled: bool = Field(default=False, validation_alias="AUTH_ENABLED")
    admin_email: str = Field(default="", validation_alias="ADMIN_EMAIL")
    admin_password: str = Field(default="", validation_alias="ADMIN_PASSWORD")
    session_ttl_hours: int = Field(
        default=24, ge=1, le=720, validation_alias="SESSION_TTL_HOURS",
    )

    # Insert the built-in default bookmarks when the table is empty at startup
    seed_defaults: bool = Field(default=True, validation_alias="SEED_DEFAULTS")

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @field_validator("api_prefix")
    @classmethod
    def normalize_api_prefix(cls, v: str) -> str:
        """Normalize the prefix to '' or '/segment' (leading slash, no trailing slash)."""
        v = v.strip().strip("/")
        return f"/{v}" if v else ""

    @model_validator(mode="after")
    def validate_admin_credentials(self) -> "Settings":
        """
        Require an admin credential pair when auth is enabled.

        Login compares against these values, so an empty email or password would
        either lock the admin out or accept blank credentials.
        """
        if not self.auth_enabled:
            return self

        missing = [
            name
            for name, value in (
                ("ADMIN_EMAIL", self.admin_email),
                ("ADMIN_PASSWORD", self.admin_password),
            )
            if not value
        ]
        if missing:
            raise ValueError(
                f"AUTH_ENABLED requires {' and '.join(missing)} to be set.",
            )
        return self

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins string into a list."""
        if not self.cors_origins_str:
            return []
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
