"""
API v1 Router.

Aggregates all v1 API endpoints.
"""

from fastapi import APIRouter
from backend.app.api.v1.endpoints import bikes, pricing, rentals

router = APIRouter()

# Bike listings and estimate-time pricing
router.include_router(bikes.router)

# Stateless pricing
router.include_router(pricing.router)

# Booking, payment confirmation and settlement
router.include_router(rentals.router)
