"""
Rental Schemas.
"""

from pydantic import BaseModel, Field, model_validator
from datetime import datetime
from decimal import Decimal
from typing import Optional

from backend.app.domain.pricing.models import PricingType
from backend.app.models.rental_enums import RentalStatus, PaymentStatus


class RentalCreate(BaseModel):
    """Schema for booking a bike."""
    bike_id: int
    customer_ref: str = Field(..., min_length=1, max_length=100)
    pickup_time: datetime
    dropoff_time: datetime
    pricing_type: Optional[PricingType] = None


class PaymentConfirmation(BaseModel):
    """Verified payment reference from the payment gateway."""
    payment_reference: str = Field(..., min_length=1, max_length=100)


class RentalCompletion(BaseModel):
    """Odometer readings taken at pickup and return."""
    start_km: Decimal = Field(..., ge=0)
    end_km: Decimal = Field(..., ge=0)

    @model_validator(mode="after")
    def check_odometer(self):
        if self.end_km < self.start_km:
            raise ValueError("end_km must be greater than or equal to start_km")
        return self


class RentalResponse(BaseModel):
    """Schema for displaying a rental."""
    id: int
    booking_id: str
    bike_id: int
    customer_ref: str
    pickup_time: datetime
    dropoff_time: datetime
    requested_pricing_type: Optional[str]
    resolved_pricing_type: Optional[str]
    estimated_total: Optional[Decimal]
    subtotal: Optional[Decimal]
    tax_amount: Optional[Decimal]
    total_amount: Optional[Decimal]
    start_km: Optional[Decimal]
    end_km: Optional[Decimal]
    actual_distance: Optional[Decimal]
    status: RentalStatus
    payment_status: PaymentStatus
    payment_reference: Optional[str]
    paid_at: Optional[datetime]
    settled_at: Optional[datetime]
    cancelled_at: Optional[datetime]
    created_at: datetime

    class Config:
        from_attributes = True
