"""
Pricing engine errors.

Every error is a deterministic function of the engine inputs. The API layer maps
them to HTTP 422 (see core/exceptions.py); nothing here knows about HTTP.
"""

from typing import Any, Dict, Optional


class PricingError(Exception):
    """Base class for pricing engine failures."""

    def __init__(self, message: str, error_code: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)


class NoPricingConfiguredError(PricingError):
    """Raised when no pricing model applies to the bike configuration."""

    def __init__(self, requested_type: Optional[str] = None):
        super().__init__(
            message="No pricing model is configured for this bike",
            error_code="ERR_PRICING_001",
            details={"requested_type": requested_type},
        )


class DurationOutOfRangeError(PricingError):
    """Raised when a slab is selected but the duration falls outside its bounds."""

    def __init__(self, pricing_type: str, duration_hours, duration_min, duration_max):
        super().__init__(
            message=(
                f"Duration {float(duration_hours):.2f} hours is outside the valid range for "
                f"{pricing_type} pricing ({duration_min}-{duration_max} hours)"
            ),
            error_code="ERR_PRICING_002",
            details={
                "pricing_type": pricing_type,
                "duration_hours": str(duration_hours),
                "duration_min": str(duration_min),
                "duration_max": str(duration_max),
            },
        )


class InvalidDurationError(PricingError):
    """Raised when a zero or negative duration would reach a division."""

    def __init__(self, duration_hours):
        super().__init__(
            message=f"Rental duration must be positive, got {duration_hours} hours",
            error_code="ERR_PRICING_003",
            details={"duration_hours": str(duration_hours)},
        )
