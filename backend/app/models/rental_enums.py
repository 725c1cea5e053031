"""
Rental-related enumerations.
"""

import enum


class RentalStatus(str, enum.Enum):
    """Rental status enumeration."""
    PENDING = "PENDING"  # Booked, awaiting payment
    CONFIRMED = "CONFIRMED"  # Paid, ride not finished
    COMPLETED = "COMPLETED"  # Bike returned and settled
    CANCELLED = "CANCELLED"  # Withdrawn before completion


class PaymentStatus(str, enum.Enum):
    """Payment status enumeration."""
    PENDING = "PENDING"
    PAID = "PAID"


ACTIVE_RENTAL_STATUSES = (RentalStatus.PENDING, RentalStatus.CONFIRMED)
