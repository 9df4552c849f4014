"""Domain-specific exceptions raised by services and translated to HTTP errors in src.api.main."""
from __future__ import annotations

from typing import Any, Optional


class ServiceError(Exception):
    """Base exception for service-layer failures."""

    status_code: int = 400
    error_type: str = "service_error"

    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(ServiceError):
    """Raised when a requested record does not exist."""
    status_code = 404
    error_type = "not_found"


class ConflictError(ServiceError):
    """Raised when a change would violate a uniqueness or dependency rule."""
    status_code = 409
    error_type = "conflict"


class InvalidReferenceError(ServiceError):
    """Raised when a payload points at a record that does not exist."""
    status_code = 400
    error_type = "invalid_reference"


class ImportFormatError(ServiceError):
    """Raised when an uploaded spreadsheet cannot be imported."""
    status_code = 400
    error_type = "import_error"


class PayloadTooLargeError(ServiceError):
    """Raised when an upload exceeds the configured size limit."""
    status_code = 413
    error_type = "payload_too_large"
