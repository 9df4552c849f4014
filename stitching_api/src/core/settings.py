from __future__ import annotations

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application-level settings for the FastAPI service.

    This is separate from src.db.config.Settings, which focuses on the storage layer.
    """

    # FastAPI metadata
    APP_NAME: str = Field(default="Stitching Unit ERP API")
    APP_DESCRIPTION: str = Field(
        default=(
            "Backend API for a stitching unit: production units, expenses, revenues, "
            "inventory, customers, orders, salaries, maintenance and reports, stored "
            "as spreadsheet workbooks."
        )
    )
    APP_VERSION: str = Field(default="0.1.0")

    # CORS
    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: ["*"],
        description="Comma-separated list or JSON array of allowed origins. Default: *",
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True)
    CORS_ALLOW_METHODS: List[str] = Field(default_factory=lambda: ["*"])
    CORS_ALLOW_HEADERS: List[str] = Field(default_factory=lambda: ["*"])

    # Authentication
    AUTH_REQUIRED: bool = Field(
        default=False,
        description="If true, every business endpoint requires a bearer token.",
    )
    JWT_SECRET_KEY: str = Field(default="change-me", description="HMAC secret for signing tokens")
    JWT_ALGORITHM: str = Field(default="HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60)
    REFRESH_TOKEN_EXPIRE_MINUTES: int = Field(default=60 * 24 * 7)

    # Startup behavior
    SEED_ADMIN: bool = Field(
        default=True,
        description="If true, create the default admin user at startup when no users exist.",
    )
    DEFAULT_ADMIN_USERNAME: str = Field(default="admin")
    DEFAULT_ADMIN_PASSWORD: str = Field(default="admin")
    AUTO_SEED_SAMPLE_DATA: bool = Field(
        default=False,
        description="If true, load sample GST expenses/revenues at startup.",
    )

    # Logging / environment label
    LOG_LEVEL: str = Field(default="INFO")
    ENVIRONMENT: Optional[str] = Field(
        default=None, description="Environment label (dev/test/prod)"
    )

    # Automatically load from .env at runtime.
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v):
        """
        Accept both JSON array format and comma-separated formats for CORS origins.
        """
        if v is None:
            return ["*"]
        if isinstance(v, str):
            if v.strip().startswith("["):
                return v
            parts = [p.strip() for p in v.split(",") if p.strip()]
            return parts or ["*"]
        if isinstance(v, list):
            return v or ["*"]
        return ["*"]


# PUBLIC_INTERFACE
def get_app_settings() -> AppSettings:
    """
    Return a new AppSettings instance populated from environment variables.

    Note:
      A new instance is built on each call so tests can change the environment
      between requests.
    """
    return AppSettings()
