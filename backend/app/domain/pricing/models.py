"""
Pricing engine value types.

PricingConfiguration is an immutable snapshot of one bike's pricing fields.
PriceBreakdown is the engine output. Both are frozen; the engine never mutates them.
"""

import enum
from decimal import Decimal
from typing import Dict, Optional

from pydantic import AliasChoices, BaseModel, Field, model_validator


DEFAULT_TAX_PERCENTAGE = Decimal("18.0")
LEGACY_EXTRA_DISTANCE_RATE = Decimal("5")  # currency units per unit distance


class PricingType(str, enum.Enum):
    """Slab types a caller may request."""
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"


class ResolvedPricingType(str, enum.Enum):
    """The single pricing model applied to a calculation."""
    LEGACY = "legacy"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    PACKAGE_12_HOUR = "package12Hour"
    TARIFF = "tariff"


class MinimumBookingRule(str, enum.Enum):
    NONE = "none"
    MIN_DURATION = "min_duration"  # minimum_value is in hours
    MIN_PRICE = "min_price"  # minimum_value is a price


class Slab(BaseModel):
    """One tier of the tiered (slab) model."""
    price: Decimal = Field(..., ge=0)
    duration_min: Decimal = Field(..., ge=0, description="Hours, inclusive")
    duration_max: Decimal = Field(..., ge=0, description="Hours, inclusive")
    included_distance: Decimal = Field(
        Decimal("0"), ge=0,
        validation_alias=AliasChoices("included_distance", "included_km"),
    )
    extra_distance_rate: Decimal = Field(
        Decimal("0"), ge=0,
        validation_alias=AliasChoices("extra_distance_rate", "extra_km_price"),
    )
    minimum_booking_rule: MinimumBookingRule = MinimumBookingRule.NONE
    minimum_value: Decimal = Field(Decimal("0"), ge=0)

    class Config:
        frozen = True
        populate_by_name = True

    @model_validator(mode="after")
    def check_duration_bounds(self):
        if self.duration_max < self.duration_min:
            raise ValueError("duration_max must be greater than or equal to duration_min")
        return self


class PricingConfiguration(BaseModel):
    """
    Pricing fields of a single bike at calculation time.

    Several pricing schemes coexist on one record (legacy, slabs, 12-hour package,
    weekday/weekend tariff). TariffResolver picks exactly one of them.
    """
    # Legacy flat rate
    legacy_hourly_rate: Optional[Decimal] = Field(None, ge=0)
    km_limit: Optional[Decimal] = Field(None, ge=0)

    # Tiered model
    slabs: Dict[PricingType, Slab] = Field(default_factory=dict)

    # Fixed packages
    package_12_hour: Optional[Decimal] = Field(None, ge=0)
    per_week_rate: Optional[Decimal] = Field(None, ge=0)

    # Tariff model
    weekday_hourly_rate: Optional[Decimal] = Field(None, ge=0)
    weekend_hourly_rate: Optional[Decimal] = Field(None, ge=0)
    min_booking_hours: Optional[Decimal] = Field(None, ge=0)
    km_limit_per_hour: Optional[Decimal] = Field(None, ge=0)
    excess_distance_rate: Optional[Decimal] = Field(None, ge=0)

    # Modifiers
    weekend_surge_multiplier: Decimal = Field(Decimal("1.0"), ge=1)
    tax_percentage: Optional[Decimal] = Field(None, ge=0, le=100)

    class Config:
        frozen = True

    @property
    def has_tariff(self) -> bool:
        return bool(self.weekday_hourly_rate) or bool(self.weekend_hourly_rate)

    @property
    def has_package_12_hour(self) -> bool:
        return bool(self.package_12_hour)

    @property
    def has_legacy_rate(self) -> bool:
        return bool(self.legacy_hourly_rate)


class PriceBreakdown(BaseModel):
    """
    Complete price breakdown for one rental window.

    subtotal = price_after_surge + excess_distance_charge
    total = subtotal + tax_amount
    Values are unrounded; callers round for display only.
    """
    duration_hours: Decimal
    base_price: Decimal
    price_after_surge: Decimal
    surge_multiplier: Decimal
    has_weekend: bool
    excess_distance: Decimal
    excess_distance_charge: Decimal
    subtotal: Decimal
    tax_percentage: Decimal
    tax_amount: Decimal
    total: Decimal
    resolved_pricing_type: ResolvedPricingType
    included_distance: Decimal
    extra_distance_rate: Decimal

    class Config:
        frozen = True
