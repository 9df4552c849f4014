from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from fastapi import APIRouter, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.core.logging import configure_logging, correlation_id_var
from src.core.settings import get_app_settings
from src.db.models import ALL_MODELS
from src.db.seed import seed_admin, seed_sample_gst_data
from src.db.session import WorkbookSession, get_engine
from src.repositories.finance import ExpenseRepository
from src.schemas.common import ErrorInfo, ErrorResponse, MessageResponse
from src.services.exceptions import ServiceError

# Routers
from src.api.routes.auth import router as auth_router
from src.api.routes.users import router as users_router
# Domain routers
from src.api.routes.production import router as production_router
from src.api.routes.finance import expenses_router, revenues_router
from src.api.routes.inventory import router as inventory_router
from src.api.routes.sales import customers_router, orders_router
from src.api.routes.payroll import router as payroll_router
from src.api.routes.maintenance import router as maintenance_router
from src.api.routes.dashboard import router as dashboard_router
from src.api.routes.reports import router as reports_router
from src.api.routes.transfer import router as import_router
from src.api.routes.gst import router as gst_router, sample_router as gst_sample_router

settings = get_app_settings()

# Configure structured logging once at import
configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "Health", "description": "Liveness probe."},
    {"name": "Auth", "description": "Authentication and token endpoints."},
    {"name": "Users", "description": "User administration endpoints (admin role)."},
    {"name": "Production Units", "description": "Production units and their running cost."},
    {"name": "Expenses", "description": "Expenses; drive each unit's cost_to_date."},
    {"name": "Revenues", "description": "Revenues, optionally linked to orders."},
    {"name": "Inventory", "description": "Inventory items and stock value."},
    {"name": "Customers", "description": "Customer master data."},
    {"name": "Orders", "description": "Stitching orders."},
    {"name": "Salary Payments", "description": "Monthly salary payments."},
    {"name": "Maintenance", "description": "Machine maintenance records."},
    {"name": "Dashboard", "description": "Aggregates for the dashboard."},
    {"name": "Reports", "description": "Generated report files (Excel/CSV/PDF)."},
    {"name": "Import", "description": "Spreadsheet import."},
    {"name": "GST", "description": "GST arithmetic, reference tables and sample data."},
]

app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    openapi_tags=openapi_tags,
)

# CORS - avoid wildcard with credentials
cors_allow_credentials = settings.CORS_ALLOW_CREDENTIALS
if settings.CORS_ORIGINS == ["*"] and cors_allow_credentials:
    logger.warning("CORS_ALLOW_CREDENTIALS=True with '*' origins is not permitted; disabling credentials.")
    cors_allow_credentials = False

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=cors_allow_credentials,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    """
    Enrich request context with a correlation_id for logging and error responses.
    Adds 'X-Correlation-ID' to every response.
    """
    corr = request.headers.get("X-Correlation-ID") or request.headers.get("X-Request-ID") or str(uuid4())
    token_corr = correlation_id_var.set(corr)
    request.state.correlation_id = corr

    logger.info("Incoming request %s %s", request.method, request.url.path)
    try:
        response = await call_next(request)
    finally:
        correlation_id_var.reset(token_corr)

    response.headers["X-Correlation-ID"] = corr
    return response


def _build_error_response(
    request: Request,
    status_code: int,
    error_type: str,
    message: str,
    details: Any | None = None,
    headers: dict | None = None,
) -> JSONResponse:
    """Build a standardized ErrorResponse JSONResponse."""
    err = ErrorResponse(
        status=status_code,
        error=ErrorInfo(type=error_type, message=message, details=jsonable_encoder(details)),
        correlation_id=getattr(request.state, "correlation_id", None),
        path=request.url.path,
        method=request.method,
        timestamp=datetime.now(tz=timezone.utc),
    )
    return JSONResponse(status_code=status_code, content=err.model_dump(mode="json"), headers=headers)


@app.exception_handler(ServiceError)
async def service_exception_handler(request: Request, exc: ServiceError):
    """Translate domain exceptions (not found, conflict, invalid reference, import errors...)."""
    logger.info("%s on %s %s: %s", exc.error_type, request.method, request.url.path, exc.message)
    return _build_error_response(
        request=request,
        status_code=exc.status_code,
        error_type=exc.error_type,
        message=exc.message,
        details=exc.details,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Global handler for HTTPException to produce a standardized error envelope.
    """
    detail = exc.detail if isinstance(exc.detail, str) else "HTTP Error"
    return _build_error_response(
        request=request,
        status_code=exc.status_code,
        error_type="http_error",
        message=str(detail),
        details=None if isinstance(exc.detail, str) else exc.detail,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Global handler for request validation errors with a standard structure (400).
    """
    return _build_error_response(
        request=request,
        status_code=400,
        error_type="validation_error",
        message="Request validation failed",
        details=exc.errors(),
    )


@app.exception_handler(ValidationError)
async def record_validation_exception_handler(request: Request, exc: ValidationError):
    """
    Records are revalidated when partial updates are merged; failures there are client errors too.
    """
    return _build_error_response(
        request=request,
        status_code=400,
        error_type="validation_error",
        message="Record validation failed",
        details=exc.errors(include_url=False, include_context=False),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """
    Catch-all handler to avoid leaking stack traces and to return a structured error.
    """
    logger.exception("Unhandled error processing request")
    return _build_error_response(
        request=request,
        status_code=500,
        error_type="internal_error",
        message="An unexpected error occurred",
        details=None,
    )


@app.on_event("startup")
async def on_startup() -> None:
    """
    Create missing table workbooks, then run optional seeding.

    The admin user is seeded when no user exists (SEED_ADMIN); sample GST data is
    loaded only when AUTO_SEED_SAMPLE_DATA is set and there are no expenses yet.
    """
    current = get_app_settings()
    engine = get_engine()
    engine.initialize(ALL_MODELS)
    logger.info("Data directory ready at %s", engine.data_dir)

    session = WorkbookSession(engine)
    if current.SEED_ADMIN:
        try:
            await seed_admin(session, current)
        except Exception as exc:
            logger.exception("Admin seeding failed: %s", exc)

    if current.AUTO_SEED_SAMPLE_DATA:
        try:
            if not await ExpenseRepository(session).list(limit=1):
                await seed_sample_gst_data(session)
        except Exception as exc:
            logger.exception("Sample data seeding failed: %s", exc)
            # Safe to continue without sample data.


# Build API v1 router and include sub-routers
api_v1 = APIRouter(prefix="/api/v1")


# PUBLIC_INTERFACE
@api_v1.get(
    "/health",
    response_model=MessageResponse,
    summary="Health Check",
    tags=["Health"],
)
def health_check() -> MessageResponse:
    """
    Basic liveness health check endpoint.

    Returns:
        MessageResponse: Simple confirmation that the service is running.
    """
    return MessageResponse(message="Healthy")


# Include all routers under /api/v1
api_v1.include_router(auth_router)
api_v1.include_router(users_router)
api_v1.include_router(production_router)
api_v1.include_router(expenses_router)
api_v1.include_router(revenues_router)
api_v1.include_router(inventory_router)
api_v1.include_router(customers_router)
api_v1.include_router(orders_router)
api_v1.include_router(payroll_router)
api_v1.include_router(maintenance_router)
api_v1.include_router(dashboard_router)
api_v1.include_router(reports_router)
api_v1.include_router(import_router)
api_v1.include_router(gst_router)
api_v1.include_router(gst_sample_router)

# Attach api_v1 to app
app.include_router(api_v1)
