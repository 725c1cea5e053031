"""
Bike record to pricing configuration mapping.

The only place a Bike row becomes a PricingConfiguration. Called fresh for every
estimate and settlement; the result is never cached.
"""

from decimal import Decimal
from typing import Optional

from backend.app.domain.pricing.models import PricingConfiguration
from backend.app.models.bike import Bike

# PricingConfiguration field -> Bike column
FIELD_MAP = {
    "legacy_hourly_rate": "price_per_hour",
    "km_limit": "km_limit",
    "package_12_hour": "price_12_hours",
    "per_week_rate": "price_per_week",
    "weekday_hourly_rate": "weekday_rate",
    "weekend_hourly_rate": "weekend_rate",
    "min_booking_hours": "min_booking_hours",
    "km_limit_per_hour": "km_limit_per_hour",
    "excess_distance_rate": "excess_km_charge",
    "weekend_surge_multiplier": "weekend_surge_multiplier",
    "tax_percentage": "gst_percentage",
}


def bike_to_pricing_configuration(bike: Bike) -> PricingConfiguration:
    values = {}
    for field_name, column in FIELD_MAP.items():
        value = _decimal_or_none(getattr(bike, column))
        if value is not None:
            values[field_name] = value

    if bike.pricing_slabs:
        values["slabs"] = {
            pricing_type: slab
            for pricing_type, slab in bike.pricing_slabs.items()
            if slab
        }

    return PricingConfiguration(**values)


def _decimal_or_none(value) -> Optional[Decimal]:
    if value is None:
        return None
    # str() keeps the stored float's shortest repr (10.5, not 10.5000000001)
    return Decimal(str(value))
