"""
Bike database model.

Holds the bike listing and every pricing field the pricing engine reads.
Several pricing schemes coexist on one row; the engine decides which applies.
"""

from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, JSON, Text
from sqlalchemy.sql import func
from backend.app.db.session import Base


class Bike(Base):
    """
    Bike model.

    Pricing fields are nullable; a bike only fills the scheme it is sold under.
    """
    __tablename__ = "bikes"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Listing
    name = Column(String(200), nullable=False)
    bike_type = Column(String(50), nullable=False)  # fuel, electric, scooter
    brand = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    is_available = Column(Boolean, default=True, nullable=False, index=True)

    # Legacy pricing
    price_per_hour = Column(Float, nullable=True)
    km_limit = Column(Float, nullable=True)

    # Tiered pricing: {"hourly": {...}, "daily": {...}, "weekly": {...}}
    pricing_slabs = Column(JSON, nullable=True)

    # Package pricing
    price_12_hours = Column(Float, nullable=True)
    price_per_week = Column(Float, nullable=True)

    # Tariff pricing
    weekday_rate = Column(Float, nullable=True)
    weekend_rate = Column(Float, nullable=True)
    min_booking_hours = Column(Float, nullable=True)
    km_limit_per_hour = Column(Float, nullable=True)
    excess_km_charge = Column(Float, nullable=True)

    # Modifiers
    weekend_surge_multiplier = Column(Float, default=1.0, nullable=False)
    gst_percentage = Column(Float, default=18.0, nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Bike(id={self.id}, name='{self.name}', type='{self.bike_type}')>"
