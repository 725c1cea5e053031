"""
Rental Price Engine.

Single source of rental pricing for both call sites: the pre-booking estimate
and the settlement run after payment or ride completion. Pure and synchronous;
the output depends only on the arguments.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import FrozenSet, Optional, Union

from backend.app.domain.pricing.calendar import duration_hours, has_weekend_period
from backend.app.domain.pricing.evaluator import evaluate_base_price
from backend.app.domain.pricing.models import (
    PriceBreakdown,
    PricingConfiguration,
    PricingType,
)
from backend.app.domain.pricing.resolver import TariffResolver
from backend.app.domain.pricing.surcharge import apply_weekend_surge, excess_distance_charge
from backend.app.domain.pricing.tax import compute_tax

logger = logging.getLogger("bike_rental.pricing")

Number = Union[Decimal, int, float, str]


def calculate_price(
    config: PricingConfiguration,
    pickup: datetime,
    dropoff: datetime,
    requested_type: Optional[Union[PricingType, str]] = None,
    actual_distance: Optional[Number] = None,
) -> PriceBreakdown:
    """
    Calculate the full price breakdown for a rental window.

    Args:
        config: Pricing snapshot of the bike
        pickup: Rental start
        dropoff: Rental end (a window shorter than zero is treated as zero hours)
        requested_type: hourly/daily/weekly slab the customer picked, if any
        actual_distance: Distance ridden; None for pre-booking estimates

    Returns:
        PriceBreakdown

    Raises:
        NoPricingConfiguredError, DurationOutOfRangeError, InvalidDurationError
    """
    if requested_type is not None:
        requested_type = PricingType(requested_type)
    distance = _to_decimal(actual_distance)

    hours = duration_hours(pickup, dropoff)
    model = TariffResolver.resolve(config, hours, requested_type)
    evaluation = evaluate_base_price(model, pickup, hours)

    has_weekend = has_weekend_period(pickup, dropoff)
    surge = apply_weekend_surge(
        evaluation.base_price,
        has_weekend,
        evaluation.surge_eligible,
        config.weekend_surge_multiplier,
    )
    excess = excess_distance_charge(
        distance, evaluation.included_distance, evaluation.extra_distance_rate
    )
    tax = compute_tax(surge.price_after_surge, excess.charge, config.tax_percentage)

    breakdown = PriceBreakdown(
        duration_hours=hours,
        base_price=evaluation.base_price,
        price_after_surge=surge.price_after_surge,
        surge_multiplier=surge.multiplier,
        has_weekend=has_weekend,
        excess_distance=excess.distance,
        excess_distance_charge=excess.charge,
        subtotal=tax.subtotal,
        tax_percentage=tax.tax_percentage,
        tax_amount=tax.tax_amount,
        total=tax.total,
        resolved_pricing_type=evaluation.resolved_pricing_type,
        included_distance=evaluation.included_distance or Decimal("0"),
        extra_distance_rate=evaluation.extra_distance_rate,
    )

    logger.debug(
        "Price calculated",
        extra={
            "resolved_pricing_type": breakdown.resolved_pricing_type.value,
            "duration_hours": str(hours),
            "total": str(breakdown.total),
        },
    )
    return breakdown


def available_pricing_types(config: PricingConfiguration) -> FrozenSet[PricingType]:
    """
    Pricing tabs a UI should offer before a window is chosen.

    Configured slab types; otherwise hourly when the bike bills per hour
    (tariff or legacy rate). The 12-hour package is not a slab type.
    """
    available = frozenset(pricing_type for pricing_type in PricingType if pricing_type in config.slabs)
    if available:
        return available
    if config.has_tariff or config.has_legacy_rate:
        return frozenset({PricingType.HOURLY})
    return frozenset()


def indicative_hourly_rate(config: PricingConfiguration) -> Decimal:
    """Per-hour figure used to sort and label bike listings."""
    if config.weekday_hourly_rate:
        return config.weekday_hourly_rate
    if config.package_12_hour:
        return config.package_12_hour / 12
    if config.legacy_hourly_rate:
        return config.legacy_hourly_rate
    for pricing_type in PricingType:
        slab = config.slabs.get(pricing_type)
        if slab is not None:
            return slab.price
    return Decimal("0")


def _to_decimal(value: Optional[Number]) -> Optional[Decimal]:
    if value is None or isinstance(value, Decimal):
        return value
    return Decimal(str(value))
