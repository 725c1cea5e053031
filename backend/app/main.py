"""
FastAPI Application Entry Point.

This is the main application file for the Bike Rental Backend.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from backend.app.core.config import settings
from backend.app.api.v1.router import router as api_v1_router
from backend.app.db.session import engine, Base
from backend.app.core.observability import ObservabilityMiddleware, configure_logging
from backend.app.core.exceptions import (
    AppException,
    app_exception_handler,
    pricing_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    generic_exception_handler
)
from backend.app.domain.pricing.errors import PricingError
from fastapi import HTTPException

# Import models to ensure they are registered with Base
from backend.app.models.bike import Bike
from backend.app.models.rental import Rental

configure_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for application startup/shutdown.

    Creates database tables on startup.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield

# Initialize FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.api_version,
    debug=settings.debug,
    description="Bike and scooter rental backend with a shared rental pricing engine",
    lifespan=lifespan,
)

app.add_middleware(ObservabilityMiddleware)

# Register global exception handlers
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(PricingError, pricing_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint.

    Returns:
        dict: Status and application information
    """
    return {
        "status": "healthy",
        "app_name": settings.app_name,
        "version": settings.api_version,
    }


# Include API v1 router
app.include_router(api_v1_router, prefix=f"/{settings.api_version}")


@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint.

    Returns:
        dict: Welcome message and API documentation links
    """
    return {
        "message": "Welcome to Bike Rental Backend API",
        "docs": "/docs",
        "health": "/health",
    }
