"""Main FastAPI application."""
import asyncio
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from kosaquest.settings import settings
from kosaquest.api.admin import router as admin_router
from kosaquest.api.auth import router as auth_router
from kosaquest.api.badges import router as badges_router
from kosaquest.api.quiz import router as quiz_router
from kosaquest.api.stories import router as stories_router
from kosaquest.api.users import router as users_router
from kosaquest.infra.db.base import Base, engine
# Import all models to ensure they're registered with Base
from kosaquest.infra.db.models import (  # noqa: F401
    UserModel,
    StoryModel,
    UserProgressModel,
    XPCreditModel,
    NFTBadgeModel,
)
from kosaquest.domain.common.errors import (
    NotFoundError as DomainNotFoundError,
    AuthorizationError as DomainAuthorizationError,
    ValidationError as DomainValidationError,
    BadRequestError as DomainBadRequestError,
    ConflictError as DomainConflictError,
    DependencyError as DomainDependencyError,
)

# Configure logging
logging.basicConfig(
    level=getattr(logging, str(settings.log_level).upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except Exception as e:
        # Database might not be ready yet; /ready reports it
        logger.warning("Could not connect to database during startup: %s", e)

    yield

    # Shutdown
    try:
        await engine.dispose()
    except asyncio.CancelledError:
        logger.info("Lifespan shutdown cancelled (e.g. Ctrl+C); cleanup attempted.")
        raise


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=r".*",
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"],
    allow_headers=["*"],
    max_age=3600,
)


def _mask_headers(headers: dict) -> dict:
    """Hide bearer tokens and the admin key from logs."""
    masked = dict(headers)
    auth_header = masked.get("authorization")
    if auth_header and auth_header.startswith("Bearer "):
        token = auth_header[7:]
        masked["authorization"] = f"Bearer {token[:8]}..." if len(token) > 8 else "Bearer ***"
    if "x-admin-key" in masked:
        masked["x-admin-key"] = "***"
    return masked


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all requests and responses."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        logger.info("[REQUEST] %s %s", request.method, request.url.path)
        logger.debug("   Query params: %s", dict(request.query_params))
        logger.debug("   Headers: %s", _mask_headers(dict(request.headers)))

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            "[RESPONSE] %s %s - %d (%.3fs)",
            request.method, request.url.path, response.status_code, process_time,
        )
        return response


# Add logging middleware AFTER CORS (CORS must be first)
app.add_middleware(LoggingMiddleware)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log request validation errors and return 422."""
    errors = exc.errors()
    logger.warning("[VALIDATION ERROR] %s %s: %d error(s)", request.method, request.url.path, len(errors))
    for i, error in enumerate(errors, 1):
        logger.debug("   Error %d: %s", i, error)
    return JSONResponse(
        status_code=422,
        content={"detail": jsonable_encoder(errors)},
    )


# Domain error handlers: map domain exceptions to correct HTTP status
@app.exception_handler(DomainNotFoundError)
async def domain_not_found_handler(request: Request, exc: DomainNotFoundError):
    """Return 404 when a resource is not found."""
    return JSONResponse(
        status_code=404,
        content={"detail": f"{exc.resource} not found"},
    )


@app.exception_handler(DomainAuthorizationError)
async def domain_authorization_handler(request: Request, exc: DomainAuthorizationError):
    """Return 403 when the user is not authorized."""
    return JSONResponse(
        status_code=403,
        content={"detail": exc.message},
    )


@app.exception_handler(DomainValidationError)
async def domain_validation_handler(request: Request, exc: DomainValidationError):
    """Return 422 for domain validation errors."""
    return JSONResponse(
        status_code=422,
        content={"detail": exc.message},
    )


@app.exception_handler(DomainBadRequestError)
async def domain_bad_request_handler(request: Request, exc: DomainBadRequestError):
    """Return 400 when a business rule rejects the request."""
    return JSONResponse(
        status_code=400,
        content={"detail": exc.message},
    )


@app.exception_handler(DomainConflictError)
async def domain_conflict_handler(request: Request, exc: DomainConflictError):
    """Return 409 for conflict errors, echoing existing state when known."""
    content = {"detail": exc.message}
    if exc.existing:
        content.update(exc.existing)
    return JSONResponse(status_code=409, content=content)


@app.exception_handler(DomainDependencyError)
async def domain_dependency_handler(request: Request, exc: DomainDependencyError):
    """Return 502 when an external collaborator failed."""
    return JSONResponse(
        status_code=502,
        content={"detail": exc.message},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Log the failure and return a generic 500."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# Health check (root and under /v1)
@app.get("/health")
@app.get(f"{settings.api_v1_prefix}/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "version": settings.app_version}


@app.get("/ready")
async def readiness():
    """Readiness endpoint: run all checks and return 200 if ready, 503 otherwise."""
    from kosaquest.readiness import run_all_checks_async, is_ready
    checks = await run_all_checks_async()
    ready, summary = is_ready(checks)
    if ready:
        return {"ready": True, "checks": summary}
    return JSONResponse(
        status_code=503,
        content={"ready": False, "checks": summary},
    )


# API v1 routes
app.include_router(auth_router, prefix=settings.api_v1_prefix)
app.include_router(users_router, prefix=settings.api_v1_prefix)
app.include_router(stories_router, prefix=settings.api_v1_prefix)
app.include_router(quiz_router, prefix=settings.api_v1_prefix)
app.include_router(badges_router, prefix=settings.api_v1_prefix)
app.include_router(admin_router, prefix=settings.api_v1_prefix)
