from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Storage settings for the workbook-backed data directory.

    Reads from environment variables (or .env via pydantic-settings):
      - DATA_DIR: directory holding one .xlsx file per table
      - REPORTS_DIR: where generated report files are written (default DATA_DIR/reports)
      - MAX_UPLOAD_BYTES: size limit for spreadsheet imports
    """

    DATA_DIR: str = Field(default="data", description="Directory holding the table workbooks")
    REPORTS_DIR: Optional[str] = Field(
        default=None, description="Directory for generated reports (default: <DATA_DIR>/reports)"
    )
    MAX_UPLOAD_BYTES: int = Field(
        default=10 * 1024 * 1024, ge=1, description="Maximum accepted import file size (default 10MB)"
    )

    # Automatically load from .env at runtime.
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @property
    def data_path(self) -> Path:
        """Absolute path of the data directory."""
        return Path(self.DATA_DIR).expanduser().resolve()

    @property
    def reports_path(self) -> Path:
        """Absolute path of the reports directory."""
        if self.REPORTS_DIR:
            return Path(self.REPORTS_DIR).expanduser().resolve()
        return self.data_path / "reports"


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return a settings object populated from the environment."""
    # Settings is cheap to construct; for simplicity, we return a new instance.
    return Settings()
