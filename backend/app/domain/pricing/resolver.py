"""
Tariff Resolver.

Chooses exactly one pricing model for a bike configuration.
Follows priority:
1. Tariff (weekday/weekend hourly rates)
2. 12-hour package (windows up to 24 hours)
3. Tiered slab (requested type, or the slab whose range covers the duration)
4. Legacy flat hourly rate
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Union

from backend.app.domain.pricing.errors import NoPricingConfiguredError
from backend.app.domain.pricing.models import PricingConfiguration, PricingType, Slab

PACKAGE_12_HOUR_MAX_HOURS = Decimal("24")

# Auto-selection checks the longest slab first
SLAB_DETECTION_ORDER = (PricingType.WEEKLY, PricingType.DAILY, PricingType.HOURLY)


@dataclass(frozen=True)
class TariffModel:
    weekday_rate: Decimal
    weekend_rate: Decimal
    min_booking_hours: Decimal
    km_limit: Optional[Decimal]
    km_limit_per_hour: Optional[Decimal]
    excess_distance_rate: Decimal


@dataclass(frozen=True)
class Package12HourModel:
    price: Decimal
    km_limit: Optional[Decimal]
    excess_distance_rate: Decimal


@dataclass(frozen=True)
class SlabModel:
    pricing_type: PricingType
    slab: Slab


@dataclass(frozen=True)
class LegacyModel:
    hourly_rate: Decimal
    km_limit: Optional[Decimal]


PricingModel = Union[TariffModel, Package12HourModel, SlabModel, LegacyModel]


class TariffResolver:

    @staticmethod
    def resolve(
        config: PricingConfiguration,
        duration_hours: Decimal,
        requested_type: Optional[PricingType] = None,
    ) -> PricingModel:
        """
        Select the pricing model for a rental.

        Raises:
            NoPricingConfiguredError: If no model applies.
        """
        if config.has_tariff:
            return TariffResolver._tariff(config)

        if config.has_package_12_hour and duration_hours <= PACKAGE_12_HOUR_MAX_HOURS:
            return Package12HourModel(
                price=config.package_12_hour,
                km_limit=config.km_limit,
                excess_distance_rate=config.excess_distance_rate or Decimal("0"),
            )

        slab_model = TariffResolver._slab(config, duration_hours, requested_type)
        if slab_model is not None:
            return slab_model

        if config.has_legacy_rate:
            return LegacyModel(hourly_rate=config.legacy_hourly_rate, km_limit=config.km_limit)

        raise NoPricingConfiguredError(requested_type.value if requested_type else None)

    @staticmethod
    def _tariff(config: PricingConfiguration) -> TariffModel:
        # A bike with only one of the two rates bills every hour at that rate.
        # The legacy web client billed the missing day kind at 0, so settlements
        # differ from its quotes for such bikes.
        weekday_rate = config.weekday_hourly_rate or config.weekend_hourly_rate
        weekend_rate = config.weekend_hourly_rate or config.weekday_hourly_rate
        return TariffModel(
            weekday_rate=weekday_rate,
            weekend_rate=weekend_rate,
            min_booking_hours=config.min_booking_hours or Decimal("0"),
            km_limit=config.km_limit,
            km_limit_per_hour=config.km_limit_per_hour,
            excess_distance_rate=config.excess_distance_rate or Decimal("0"),
        )

    @staticmethod
    def _slab(
        config: PricingConfiguration,
        duration_hours: Decimal,
        requested_type: Optional[PricingType],
    ) -> Optional[SlabModel]:
        if requested_type is not None:
            slab = config.slabs.get(requested_type)
            return SlabModel(requested_type, slab) if slab is not None else None

        for pricing_type in SLAB_DETECTION_ORDER:
            slab = config.slabs.get(pricing_type)
            if slab is not None and slab.duration_min <= duration_hours <= slab.duration_max:
                return SlabModel(pricing_type, slab)
        return None
