"""
Date helpers shared by the pricing models.

Timestamps are used in whatever timezone they arrive in; no conversion is done here.
"""

from datetime import datetime, timedelta
from decimal import Decimal

MICROSECONDS_PER_HOUR = 3_600_000_000
SATURDAY = 5
SUNDAY = 6


def is_weekend(moment: datetime) -> bool:
    """True if the calendar day of `moment` is Saturday or Sunday."""
    return moment.weekday() in (SATURDAY, SUNDAY)


def has_weekend_period(pickup: datetime, dropoff: datetime) -> bool:
    """
    True if any calendar day from pickup's date to dropoff's date (inclusive)
    is a Saturday or Sunday.

    Day-level check used by the surge rule; the tariff model rates per hour instead.
    """
    current = pickup.date()
    last = dropoff.date()
    if (last - current).days >= 6:
        return True

    while current <= last:
        if current.weekday() in (SATURDAY, SUNDAY):
            return True
        current += timedelta(days=1)
    return False


def duration_hours(pickup: datetime, dropoff: datetime) -> Decimal:
    """Exact window length in hours, clamped at zero."""
    microseconds = (dropoff - pickup) // timedelta(microseconds=1)
    if microseconds <= 0:
        return Decimal("0")
    return Decimal(microseconds) / Decimal(MICROSECONDS_PER_HOUR)


def hours_to_timedelta(hours: Decimal) -> timedelta:
    return timedelta(microseconds=int(hours * MICROSECONDS_PER_HOUR))
