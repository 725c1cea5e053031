"""
Surcharge calculator: weekend surge and excess-distance charges.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

ZERO = Decimal("0")
NO_SURGE = Decimal("1.0")


@dataclass(frozen=True)
class SurgeResult:
    multiplier: Decimal
    price_after_surge: Decimal


@dataclass(frozen=True)
class ExcessDistance:
    distance: Decimal
    charge: Decimal


def apply_weekend_surge(
    base_price: Decimal,
    has_weekend: bool,
    surge_eligible: bool,
    weekend_surge_multiplier: Decimal,
) -> SurgeResult:
    """Tariff and package models are never surge eligible."""
    if surge_eligible and has_weekend:
        return SurgeResult(weekend_surge_multiplier, base_price * weekend_surge_multiplier)
    return SurgeResult(NO_SURGE, base_price)


def excess_distance_charge(
    actual_distance: Optional[Decimal],
    included_distance: Optional[Decimal],
    extra_distance_rate: Decimal,
) -> ExcessDistance:
    """
    Charge for distance beyond the allowance.

    Estimates (no actual distance) and unlimited allowances never produce a charge.
    """
    if actual_distance is None or included_distance is None:
        return ExcessDistance(ZERO, ZERO)
    if actual_distance <= included_distance:
        return ExcessDistance(ZERO, ZERO)

    distance = actual_distance - included_distance
    return ExcessDistance(distance, distance * extra_distance_rate)
