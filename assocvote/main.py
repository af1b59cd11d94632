"""Main FastAPI application."""
from fastapi import FastAPI, HTTPException, Request, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.orm import Session
from sqlalchemy import text

from assocvote.api.v1.router import api_router
from assocvote.api.deps import get_db
from assocvote.core.config import settings
from assocvote.core.exceptions import ServiceError
from assocvote.core.rate_limit import limiter
from assocvote.core.logging_config import setup_logging, get_logger
from assocvote.middleware import LoggingMiddleware

setup_logging(level=settings.LOG_LEVEL, json_logs=settings.ENVIRONMENT == "production")
logger = get_logger(__name__)

# Validate once logging is configured so the failure is reported properly
if settings.ENVIRONMENT == "production":
    settings.validate_production_config()

logger.info(
    "application_starting",
    app_title=settings.APP_TITLE,
    app_version=settings.APP_VERSION,
    environment=settings.ENVIRONMENT,
)

app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    """Render domain errors with their status code, in FastAPI's error format."""
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        "service_error",
        status_code=exc.status_code,
        error=exc.message,
        error_type=type(exc).__name__,
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Must be added before other middleware for proper request tracking
app.add_middleware(LoggingMiddleware)


@app.middleware("http")
async def add_api_version_header(request: Request, call_next):
    """Add X-API-Version header to all responses for version tracking."""
    response = await call_next(request)
    response.headers["X-API-Version"] = settings.APP_VERSION
    return response

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"],
)

app.include_router(api_router)


@app.get("/health")
async def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint.

    Returns 503 if the database is unreachable.
    """
    health_status = {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "version": settings.APP_VERSION,
        "database": {"status": "connected"},
    }

    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        health_status["status"] = "unhealthy"
        health_status["database"]["status"] = f"error: {str(e)}"
        logger.error("health_check_failed", error=str(e))
        raise HTTPException(status_code=503, detail=health_status)

    return health_status
