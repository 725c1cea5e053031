"""
Pricing API Endpoints.

Stateless pricing against an inline configuration. Used by clients that hold
the bike record already and by the shared pricing vector checks.
"""

from fastapi import APIRouter

from backend.app.core.config import settings
from backend.app.domain.billing.rental_service import rental_window
from backend.app.domain.pricing.engine import available_pricing_types, calculate_price
from backend.app.domain.pricing.models import PricingType
from backend.app.schemas.pricing import (
    InlineEstimateRequest, EstimateResponse, PricingTypesRequest, PricingTypesResponse
)

router = APIRouter(prefix="/pricing", tags=["Pricing"])


@router.post("/estimate", response_model=EstimateResponse)
async def estimate_inline(request: InlineEstimateRequest):
    """
    Price a rental window against the given configuration.
    """
    pickup, dropoff = rental_window(request.pickup_time, request.dropoff_time)

    breakdown = calculate_price(
        request.configuration,
        pickup,
        dropoff,
        request.pricing_type,
        request.actual_distance,
    )
    return EstimateResponse(currency=settings.currency, breakdown=breakdown)


@router.post("/types", response_model=PricingTypesResponse)
async def pricing_types_inline(request: PricingTypesRequest):
    """Pricing tabs available for the given configuration."""
    types = available_pricing_types(request.configuration)
    return PricingTypesResponse(
        pricing_types=[pricing_type for pricing_type in PricingType if pricing_type in types]
    )
