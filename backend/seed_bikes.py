"""
Database seeding script for the bike catalogue.

Creates sample bikes covering every pricing scheme the pricing engine supports.
Run this script after database is set up but before first use.
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from backend.app.db.session import AsyncSessionLocal
from backend.app.models.bike import Bike
from sqlalchemy import select


DEFAULT_BIKES = [
    {
        "name": "Thunder E-Bike",
        "bike_type": "electric",
        "price_per_hour": 150,
        "km_limit": 30,
        "description": "Premium electric bike with powerful motor and long battery life.",
    },
    {
        "name": "Trail Blazer MTB",
        "bike_type": "fuel",
        "pricing_slabs": {
            "hourly": {
                "price": 120, "duration_min": 1, "duration_max": 6,
                "included_km": 25, "extra_km_price": 4,
                "minimum_booking_rule": "min_duration", "minimum_value": 2,
            },
            "daily": {
                "price": 900, "duration_min": 6, "duration_max": 24,
                "included_km": 150, "extra_km_price": 3,
                "minimum_booking_rule": "none", "minimum_value": 0,
            },
            "weekly": {
                "price": 4500, "duration_min": 24, "duration_max": 168,
                "included_km": 700, "extra_km_price": 3,
                "minimum_booking_rule": "min_price", "minimum_value": 4500,
            },
        },
        "weekend_surge_multiplier": 1.25,
        "description": "Rugged mountain bike built for off-road adventures.",
    },
    {
        "name": "City Cruiser",
        "bike_type": "scooter",
        "price_per_hour": 80,
        "km_limit": 20,
        "is_available": False,
        "description": "Comfortable city bike perfect for daily commutes.",
    },
    {
        "name": "Velocity Sport",
        "bike_type": "fuel",
        "weekday_rate": 180,
        "weekend_rate": 220,
        "min_booking_hours": 2,
        "km_limit_per_hour": 10,
        "excess_km_charge": 5,
        "description": "High-performance sport bike for speed enthusiasts.",
    },
    {
        "name": "Eco Rider E-Bike",
        "bike_type": "electric",
        "price_12_hours": 999,
        "price_per_week": 4999,
        "km_limit": 120,
        "excess_km_charge": 4,
        "description": "Eco-friendly electric bike with regenerative braking.",
    },
    {
        "name": "Urban Explorer",
        "bike_type": "scooter",
        "price_per_hour": 100,
        "km_limit": 25,
        "weekend_surge_multiplier": 1.5,
        "gst_percentage": 5,
        "description": "Versatile urban bike with modern styling.",
    },
]


async def seed_bikes():
    """
    Seed the catalogue with one bike per pricing scheme.

    Skips seeding when bikes already exist.
    """
    async with AsyncSessionLocal() as db:
        print("🌱 Starting bike seeding...")

        result = await db.execute(select(Bike).limit(1))
        if result.scalar_one_or_none():
            print("ℹ️  Bikes already exist, skipping seeding")
            return

        for data in DEFAULT_BIKES:
            db.add(Bike(**data))
            print(f"✅ Created {data['name']} ({data['bike_type']})")

        await db.commit()

        print(f"\n🎉 Seeded {len(DEFAULT_BIKES)} bikes")


if __name__ == "__main__":
    asyncio.run(seed_bikes())
