"""
Bike Pydantic schemas.

Defines request and response models for bike listings and their pricing fields.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import Dict, Literal, Optional, List

from backend.app.domain.pricing.models import PricingType, Slab


class BikeCreate(BaseModel):
    """Schema for registering a bike with its pricing fields."""
    name: str = Field(..., min_length=1, max_length=200)
    bike_type: Literal["fuel", "electric", "scooter"]
    brand: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    is_available: bool = True

    # Legacy
    price_per_hour: Optional[float] = Field(None, ge=0)
    km_limit: Optional[float] = Field(None, ge=0)

    # Tiered
    pricing_slabs: Optional[Dict[PricingType, Slab]] = None

    # Packages
    price_12_hours: Optional[float] = Field(None, ge=0)
    price_per_week: Optional[float] = Field(None, ge=0)

    # Tariff
    weekday_rate: Optional[float] = Field(None, ge=0, description="Hourly rate Monday-Friday")
    weekend_rate: Optional[float] = Field(None, ge=0, description="Hourly rate Saturday-Sunday")
    min_booking_hours: Optional[float] = Field(None, ge=0)
    km_limit_per_hour: Optional[float] = Field(None, ge=0)
    excess_km_charge: Optional[float] = Field(None, ge=0)

    # Modifiers
    weekend_surge_multiplier: float = Field(1.0, ge=1.0)
    gst_percentage: float = Field(18.0, ge=0, le=100)


class BikeResponse(BaseModel):
    """Schema for bike response."""
    id: int
    name: str
    bike_type: str
    brand: Optional[str]
    description: Optional[str]
    is_available: bool
    price_per_hour: Optional[float]
    km_limit: Optional[float]
    pricing_slabs: Optional[dict]
    price_12_hours: Optional[float]
    price_per_week: Optional[float]
    weekday_rate: Optional[float]
    weekend_rate: Optional[float]
    min_booking_hours: Optional[float]
    km_limit_per_hour: Optional[float]
    excess_km_charge: Optional[float]
    weekend_surge_multiplier: float
    gst_percentage: Optional[float]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class BikeListItem(BikeResponse):
    """Bike listing entry with its indicative per-hour price."""
    indicative_hourly_rate: Decimal


class BikeListResponse(BaseModel):
    """Schema for bike list."""
    bikes: List[BikeListItem]
    total: int
