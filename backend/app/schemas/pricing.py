"""
Pricing Schemas.

Request/response models for price estimates. Amounts are Decimals and are
serialized as strings so no precision is lost on the wire.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import Optional, List

from backend.app.domain.pricing.models import PriceBreakdown, PricingConfiguration, PricingType


class EstimateRequest(BaseModel):
    """Schema for pricing a rental window of a stored bike."""
    pickup_time: datetime
    dropoff_time: datetime
    pricing_type: Optional[PricingType] = None
    actual_distance: Optional[Decimal] = Field(None, ge=0)


class InlineEstimateRequest(EstimateRequest):
    """Schema for pricing a rental window against an inline configuration."""
    configuration: PricingConfiguration


class EstimateResponse(BaseModel):
    """Schema for a price estimate."""
    bike_id: Optional[int] = None
    currency: str
    breakdown: PriceBreakdown


class PricingTypesRequest(BaseModel):
    configuration: PricingConfiguration


class PricingTypesResponse(BaseModel):
    """Pricing tabs available for a bike."""
    bike_id: Optional[int] = None
    pricing_types: List[PricingType]
