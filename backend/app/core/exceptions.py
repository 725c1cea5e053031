"""
Custom exceptions and error handlers for consistent error responses.

Provides standardized error codes and global exception handlers.
"""

import logging

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from typing import Any, Dict

from backend.app.domain.pricing.errors import PricingError

logger = logging.getLogger("bike_rental")


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, error_code: str, status_code: int = 500, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class ResourceNotFoundError(AppException):
    """Raised when requested resource is not found."""

    def __init__(self, resource: str, resource_id: Any = None):
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with ID {resource_id} not found"
        super().__init__(
            message=message,
            error_code="ERR_NOT_FOUND_001",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource": resource, "id": resource_id}
        )


class InvalidRentalWindowError(AppException):
    """Raised when dropoff is not after pickup."""

    def __init__(self, message: str = "Dropoff time must be after pickup time"):
        super().__init__(
            message=message,
            error_code="ERR_RENTAL_001",
            status_code=status.HTTP_400_BAD_REQUEST
        )


class ActiveRentalExistsError(AppException):
    """Raised when a customer already holds an active rental."""

    def __init__(self, customer_ref: str, rental_id: int):
        super().__init__(
            message="Customer already has an active rental",
            error_code="ERR_RENTAL_002",
            status_code=status.HTTP_409_CONFLICT,
            details={"customer_ref": customer_ref, "rental_id": rental_id}
        )


class InvalidRentalStateError(AppException):
    """Raised when a rental is not in the status an action requires."""

    def __init__(self, rental_id: int, current: str, expected: str):
        super().__init__(
            message=f"Rental status is {current}, expected {expected}",
            error_code="ERR_RENTAL_003",
            status_code=status.HTTP_409_CONFLICT,
            details={"rental_id": rental_id, "current": current, "expected": expected}
        )


class BikeUnavailableError(AppException):
    """Raised when booking a bike that is not available."""

    def __init__(self, bike_id: int):
        super().__init__(
            message=f"Bike {bike_id} is not available",
            error_code="ERR_BIKE_001",
            status_code=status.HTTP_409_CONFLICT,
            details={"bike_id": bike_id}
        )


# Global Exception Handlers

async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handler for custom application exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": exc.error_code,
            "message": exc.message,
            "details": exc.details
        }
    )


async def pricing_exception_handler(request: Request, exc: PricingError) -> JSONResponse:
    """Handler for pricing engine errors. The request cannot be priced as given."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error_code": exc.error_code,
            "message": exc.message,
            "details": exc.details
        }
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handler for FastAPI HTTPException with standardized format."""
    # Map status code to error code
    error_code_map = {
        400: "ERR_BAD_REQUEST",
        404: "ERR_NOT_FOUND",
        409: "ERR_CONFLICT",
        500: "ERR_INTERNAL_SERVER"
    }

    error_code = error_code_map.get(exc.status_code, "ERR_UNKNOWN")

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": error_code,
            "message": exc.detail,
            "details": {}
        }
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handler for Pydantic validation errors."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error_code": "ERR_VALIDATION",
            "message": "Validation error",
            "details": {
                "errors": jsonable_errors(exc)
            }
        }
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handler for unhandled exceptions."""
    logger.exception(
        "Unhandled exception: %s",
        type(exc).__name__,
        extra={"correlation_id": getattr(request.state, "correlation_id", None)},
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error_code": "ERR_INTERNAL_SERVER",
            "message": "An internal server error occurred",
            "details": {}
        }
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    # ctx may hold the raw exception object from a model validator
    return [
        {key: value for key, value in error.items() if key != "ctx"}
        for error in exc.errors()
    ]
