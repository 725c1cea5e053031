"""
Duration/slab evaluator.

Computes the billable base amount for the model chosen by TariffResolver, along
with the distance allowance that model grants.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from backend.app.domain.pricing.calendar import hours_to_timedelta, is_weekend
from backend.app.domain.pricing.errors import DurationOutOfRangeError, InvalidDurationError
from backend.app.domain.pricing.models import (
    LEGACY_EXTRA_DISTANCE_RATE,
    MinimumBookingRule,
    ResolvedPricingType,
    Slab,
)
from backend.app.domain.pricing.resolver import (
    LegacyModel,
    Package12HourModel,
    PricingModel,
    SlabModel,
    TariffModel,
)

ONE_HOUR = Decimal("1")


@dataclass(frozen=True)
class BaseEvaluation:
    """
    Base amount for one model.

    included_distance is None only for a legacy rate without a km limit (unlimited).
    """
    base_price: Decimal
    resolved_pricing_type: ResolvedPricingType
    included_distance: Optional[Decimal]
    extra_distance_rate: Decimal
    surge_eligible: bool


def evaluate_base_price(
    model: PricingModel,
    pickup: datetime,
    duration_hours: Decimal,
) -> BaseEvaluation:
    if isinstance(model, TariffModel):
        return _evaluate_tariff(model, pickup, duration_hours)
    if isinstance(model, Package12HourModel):
        return BaseEvaluation(
            base_price=model.price,
            resolved_pricing_type=ResolvedPricingType.PACKAGE_12_HOUR,
            included_distance=model.km_limit or Decimal("0"),
            extra_distance_rate=model.excess_distance_rate,
            surge_eligible=False,
        )
    if isinstance(model, SlabModel):
        return BaseEvaluation(
            base_price=slab_base_price(model.slab, model.pricing_type.value, duration_hours),
            resolved_pricing_type=ResolvedPricingType(model.pricing_type.value),
            included_distance=model.slab.included_distance,
            extra_distance_rate=model.slab.extra_distance_rate,
            surge_eligible=True,
        )
    if isinstance(model, LegacyModel):
        return BaseEvaluation(
            base_price=model.hourly_rate * duration_hours,
            resolved_pricing_type=ResolvedPricingType.LEGACY,
            included_distance=model.km_limit,
            extra_distance_rate=LEGACY_EXTRA_DISTANCE_RATE,
            surge_eligible=True,
        )
    raise TypeError(f"Unsupported pricing model: {type(model).__name__}")


def slab_base_price(slab: Slab, pricing_type: str, duration_hours: Decimal) -> Decimal:
    """
    Validate the duration against the slab bounds and apply its minimum-booking rule.

    Raises:
        DurationOutOfRangeError: If the duration is outside [duration_min, duration_max].
        InvalidDurationError: If a min_duration rule would divide by a zero duration.
    """
    if duration_hours < slab.duration_min or duration_hours > slab.duration_max:
        raise DurationOutOfRangeError(
            pricing_type, duration_hours, slab.duration_min, slab.duration_max
        )

    if slab.minimum_booking_rule == MinimumBookingRule.MIN_DURATION:
        if duration_hours < slab.minimum_value:
            if duration_hours <= 0:
                raise InvalidDurationError(duration_hours)
            # Charged as if the minimum had been booked
            return slab.price * (slab.minimum_value / duration_hours)
        return slab.price

    if slab.minimum_booking_rule == MinimumBookingRule.MIN_PRICE:
        return max(slab.price, slab.minimum_value)

    return slab.price


def _evaluate_tariff(model: TariffModel, pickup: datetime, duration_hours: Decimal) -> BaseEvaluation:
    billed_hours = max(duration_hours, model.min_booking_hours)

    # Walk forward from pickup in 1-hour increments; the last one is pro-rated
    base_price = Decimal("0")
    remaining = billed_hours
    cursor = pickup
    while remaining > 0:
        step = min(remaining, ONE_HOUR)
        rate = model.weekend_rate if is_weekend(cursor) else model.weekday_rate
        base_price += rate * step
        remaining -= step
        cursor += hours_to_timedelta(step)

    # No allowance configured means every kilometre is excess
    if model.km_limit:
        included_distance = model.km_limit
    else:
        included_distance = (model.km_limit_per_hour or Decimal("0")) * billed_hours

    return BaseEvaluation(
        base_price=base_price,
        resolved_pricing_type=ResolvedPricingType.TARIFF,
        included_distance=included_distance,
        extra_distance_rate=model.excess_distance_rate,
        surge_eligible=False,
    )
