"""FastAPI application entry point"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from household_ledger import __version__
from household_ledger.api.v1.router import api_router
from household_ledger.config import get_settings
from household_ledger.core.exceptions import AppException
from household_ledger.core.logging import configure_logging
from household_ledger.services.cache_service import CacheService

settings = get_settings()

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Release the Redis connection on shutdown"""
    yield
    await CacheService.close_redis_client()


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=__version__,
    description="Backend API for household shared expenses and settlements",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Add CORS middleware
if settings.allowed_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[origin.strip() for origin in settings.allowed_origins],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# Exception handlers
@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """Handle custom application exceptions"""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "message": exc.message,
                "type": exc.error_type,
                "path": str(request.url.path),
            }
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle all other exceptions"""
    logger.exception("Unhandled exception on %s", request.url.path)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {"message": "Internal server error", "type": "InternalServerError"}
        },
    )


# Include API v1 router
app.include_router(api_router, prefix=settings.api_prefix)


# Root endpoint
@app.get("/", tags=["Root"])
async def root():
    """Root endpoint - points at the docs"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "docs_url": "/docs",
        "version": __version__,
    }


# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "cache": await CacheService.health_check()}
