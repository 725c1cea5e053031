"""
Rental database model.

A booking of one bike for one window, priced at booking time (estimate),
at payment confirmation and again at ride completion (settlement).
"""

from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, Enum
from sqlalchemy.sql import func
from backend.app.db.session import Base
from backend.app.models.rental_enums import RentalStatus, PaymentStatus


class Rental(Base):
    """
    Rental model.

    pickup_time/dropoff_time are stored as local wall-clock times so that every
    pricing run sees the same calendar days. Amounts are unrounded.
    Status flow: PENDING -> CONFIRMED -> COMPLETED (or CANCELLED).
    """
    __tablename__ = "rentals"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    booking_id = Column(String(64), unique=True, nullable=False, index=True)

    # Parties
    bike_id = Column(Integer, ForeignKey('bikes.id'), nullable=False, index=True)
    customer_ref = Column(String(100), nullable=False, index=True)

    # Window
    pickup_time = Column(DateTime, nullable=False)
    dropoff_time = Column(DateTime, nullable=False)

    # Pricing
    requested_pricing_type = Column(String(20), nullable=True)
    resolved_pricing_type = Column(String(20), nullable=True)
    estimated_total = Column(Numeric, nullable=True)
    subtotal = Column(Numeric, nullable=True)
    tax_amount = Column(Numeric, nullable=True)
    total_amount = Column(Numeric, nullable=True)

    # Ride
    start_km = Column(Numeric, nullable=True)
    end_km = Column(Numeric, nullable=True)
    actual_distance = Column(Numeric, nullable=True)

    # Status
    status = Column(Enum(RentalStatus), default=RentalStatus.PENDING, nullable=False, index=True)
    payment_status = Column(Enum(PaymentStatus), default=PaymentStatus.PENDING, nullable=False)
    payment_reference = Column(String(100), nullable=True)

    # Timestamps
    paid_at = Column(DateTime(timezone=True), nullable=True)
    settled_at = Column(DateTime(timezone=True), nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Rental(id={self.id}, booking_id='{self.booking_id}', status='{self.status.value}')>"
