"""focusguard - FastAPI Application Entry Point.

Serves the validation engine with:
- Request ID tracking and request logging
- Error sanitization
- Trusted host and CORS restrictions
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.trustedhost import TrustedHostMiddleware

from focusguard.config import (
    ALLOWED_HOSTS,
    CORS_ORIGINS,
    DEBUG,
    logger,
)
from focusguard.core.security import get_validation_facade
from focusguard.middleware import (
    ErrorSanitizationMiddleware,
    RequestLoggingMiddleware,
)
from focusguard.routers import validation
from focusguard.schemas import HealthResponse
from focusguard.version import __version__


# -----------------------------------------------------------------------------
# Application Lifespan
# -----------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown events."""
    logger.info("Starting focusguard v%s", __version__)
    # Load the policy once at startup so misconfiguration fails fast
    get_validation_facade()
    yield
    logger.info("Shutting down focusguard")


# -----------------------------------------------------------------------------
# Application Factory
# -----------------------------------------------------------------------------

def create_app(debug_mode: bool = DEBUG) -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="focusguard",
        version=__version__,
        lifespan=lifespan,
        # Disable docs in production
        docs_url="/docs" if debug_mode else None,
        redoc_url="/redoc" if debug_mode else None,
        openapi_url="/openapi.json" if debug_mode else None,
    )

    # -------------------------------------------------------------------------
    # Middleware Stack (last added = outermost)
    # -------------------------------------------------------------------------

    # 1. Error sanitization
    app.add_middleware(ErrorSanitizationMiddleware, debug=debug_mode)

    # 2. Request ID assignment and logging
    app.add_middleware(
        RequestLoggingMiddleware,
        exclude_paths={"/health", "/healthz", "/ready"},
    )

    # 3. Trusted hosts (prevents host header attacks)
    if ALLOWED_HOSTS and ALLOWED_HOSTS != ["*"]:
        app.add_middleware(
            TrustedHostMiddleware,
            allowed_hosts=ALLOWED_HOSTS,
        )

    # 4. CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID", "X-RateLimit-Limit", "X-RateLimit-Remaining", "X-RateLimit-Reset", "Retry-After"],
        max_age=600,  # Cache preflight for 10 minutes
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle request schema errors without echoing the input back."""
        errors = exc.errors()
        clean_errors = [
            {"field": ".".join(str(loc) for loc in err.get("loc", [])), "message": err.get("msg", "Invalid value")}
            for err in errors[:5]  # Limit to 5 errors
        ]
        return JSONResponse(
            status_code=422,
            content={"detail": "Validation error", "errors": clean_errors},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions with consistent format."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    # -------------------------------------------------------------------------
    # Health Check Endpoints
    # -------------------------------------------------------------------------

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    @app.get("/healthz", response_model=HealthResponse, include_in_schema=False)
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers and orchestrators."""
        return HealthResponse(
            status="healthy",
            version=__version__,
            timestamp=datetime.now(timezone.utc),
        )

    @app.get("/ready", tags=["Health"])
    async def readiness_check():
        """Readiness check - the policy is loaded and the engine is usable."""
        get_validation_facade()
        return {"status": "ready"}

    app.include_router(validation.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "focusguard.main:app",
        host="0.0.0.0",
        port=8000,
        reload=DEBUG,
        limit_concurrency=100,
        limit_max_requests=10000,
    )
