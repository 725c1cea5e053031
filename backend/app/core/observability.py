"""
Observability Middleware.

Adds correlation IDs and structured logging context to requests.
"""

import time
import uuid
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("bike_rental")

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
CORRELATION_HEADER = "X-Correlation-ID"


def configure_logging(level: str = "INFO") -> None:
    """Configure the application logger once at startup."""
    logging.basicConfig(format=LOG_FORMAT)
    logger.setLevel(level.upper())


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """Tags every request with a correlation ID and logs its outcome."""

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        response.headers[CORRELATION_HEADER] = correlation_id
        response.headers["X-Process-Time"] = f"{duration_ms:.2f}"

        log_data = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round(duration_ms, 2),
        }

        if response.status_code >= 500:
            logger.error("Request failed", extra=log_data)
        elif response.status_code >= 400:
            logger.warning("Request rejected", extra=log_data)
        else:
            logger.info("Request served", extra=log_data)

        return response
