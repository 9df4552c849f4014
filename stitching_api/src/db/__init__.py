"""
Storage package initializer exposing key public interfaces for configuration,
workbook engine/session management and the record base class.
"""

from .base import Base
from .config import get_settings, Settings
from .session import (
    WorkbookEngine,
    WorkbookSession,
    get_engine,
    get_session,
    reset_engine,
)

# Import models so ALL_MODELS is available when the db package is imported.
from . import models as models  # noqa: F401

__all__ = [
    "Base",
    "Settings",
    "get_settings",
    "WorkbookEngine",
    "WorkbookSession",
    "get_engine",
    "get_session",
    "reset_engine",
    "models",
]
