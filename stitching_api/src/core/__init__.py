"""
Core application utilities for settings and FastAPI dependencies.

This package provides:
- Application-level settings (separate from storage settings)
- Logging configuration with request correlation ids
- Password hashing and JWT helpers
- Dependency helpers (workbook session, current user, role checks)
"""
