"""
FastAPI application initialization
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from api.routes import health, institutions, congress, insider, analytics, live
from api.middleware import RequestContextMiddleware
from core.config import settings
from core.database import init_db
from core.exceptions import InvalidQueryError, ResourceNotFoundError
from core.logging import setup_logging
from schemas.api import ErrorResponse
from ingestion.scheduler import IngestionScheduler
import logging

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Disclosure Tracker API",
    description="Congressional trades, SEC Form 4 insider filings and 13F institutional holdings",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(RequestContextMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(institutions.router)
app.include_router(congress.router)
app.include_router(insider.router)
app.include_router(analytics.router)
app.include_router(live.router)


# ============================================================================
# Error handlers
# ============================================================================

@app.exception_handler(InvalidQueryError)
async def invalid_query_handler(request: Request, exc: InvalidQueryError):
    return JSONResponse(status_code=400, content=ErrorResponse(error=exc.message).model_dump())


@app.exception_handler(ResourceNotFoundError)
async def not_found_handler(request: Request, exc: ResourceNotFoundError):
    return JSONResponse(status_code=404, content=ErrorResponse(error=exc.message).model_dump())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    request_id = getattr(request.state, "request_id", "-")
    logger.exception(f"[{request_id}] Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content=ErrorResponse(error=str(exc)).model_dump())


# ============================================================================
# Lifecycle
# ============================================================================

@app.on_event("startup")
async def startup_event():
    """Application startup event"""
    setup_logging()
    logger.info("Starting Disclosure Tracker API")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    # The service cannot run without its store
    await init_db()

    if settings.SCHEDULER_ENABLED:
        app.state.scheduler = IngestionScheduler()
        app.state.scheduler.start()


@app.on_event("shutdown")
async def shutdown_event():
    """Application shutdown event"""
    logger.info("Shutting down Disclosure Tracker API")
    scheduler = getattr(app.state, "scheduler", None)
    if scheduler is not None:
        scheduler.stop()


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Disclosure Tracker API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
        "live": "/ws",
        "endpoints": {
            "institutions": "/api/institutions",
            "congress": "/api/congress",
            "insider": "/api/insider",
            "search": "/api/search",
            "trending": "/api/trending",
            "stats": "/api/stats"
        }
    }
