"""
Bike API Endpoints.

Bike registration/listing plus the estimate-time pricing views a booking UI uses.
"""

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Literal, Optional

from backend.app.core.config import settings
from backend.app.db.session import get_db
from backend.app.domain.billing.bike_pricing import bike_to_pricing_configuration
from backend.app.domain.billing.rental_service import RentalBillingService
from backend.app.domain.pricing.engine import available_pricing_types, indicative_hourly_rate
from backend.app.domain.pricing.models import PricingType
from backend.app.models.bike import Bike
from backend.app.schemas.bike import BikeCreate, BikeResponse, BikeListItem, BikeListResponse
from backend.app.schemas.pricing import EstimateRequest, EstimateResponse, PricingTypesResponse

router = APIRouter(prefix="/bikes", tags=["Bikes"])


@router.post("", response_model=BikeResponse, status_code=status.HTTP_201_CREATED)
async def create_bike(
    bike_data: BikeCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Register a bike with its pricing fields.
    """
    values = bike_data.model_dump(exclude={"pricing_slabs"})
    if bike_data.pricing_slabs:
        values["pricing_slabs"] = {
            pricing_type.value: slab.model_dump(mode="json")
            for pricing_type, slab in bike_data.pricing_slabs.items()
        }

    new_bike = Bike(**values)
    db.add(new_bike)
    await db.commit()
    await db.refresh(new_bike)

    return BikeResponse.model_validate(new_bike)


@router.get("", response_model=BikeListResponse)
async def list_bikes(
    available_only: bool = Query(False, description="Only bikes open for booking"),
    sort: Optional[Literal["price"]] = Query(None, description="Sort by indicative hourly rate"),
    db: AsyncSession = Depends(get_db)
):
    """
    List bikes with their indicative per-hour price.
    """
    query = select(Bike).order_by(Bike.id)
    if available_only:
        query = query.where(Bike.is_available == True)
    result = await db.execute(query)

    items = [
        BikeListItem(
            **BikeResponse.model_validate(bike).model_dump(),
            indicative_hourly_rate=indicative_hourly_rate(bike_to_pricing_configuration(bike)),
        )
        for bike in result.scalars().all()
    ]
    if sort == "price":
        items.sort(key=lambda item: item.indicative_hourly_rate)

    return BikeListResponse(bikes=items, total=len(items))


@router.get("/{bike_id}", response_model=BikeResponse)
async def get_bike(
    bike_id: int = Path(..., description="Bike ID"),
    db: AsyncSession = Depends(get_db)
):
    """Get a single bike."""
    bike = await RentalBillingService.get_bike(db, bike_id)
    return BikeResponse.model_validate(bike)


@router.get("/{bike_id}/pricing-types", response_model=PricingTypesResponse)
async def get_pricing_types(
    bike_id: int = Path(..., description="Bike ID"),
    db: AsyncSession = Depends(get_db)
):
    """
    Pricing tabs to offer for a bike before a window is chosen.
    """
    bike = await RentalBillingService.get_bike(db, bike_id)
    types = available_pricing_types(bike_to_pricing_configuration(bike))
    return PricingTypesResponse(
        bike_id=bike.id,
        pricing_types=[pricing_type for pricing_type in PricingType if pricing_type in types],
    )


@router.post("/{bike_id}/estimate", response_model=EstimateResponse)
async def estimate_price(
    request: EstimateRequest,
    bike_id: int = Path(..., description="Bike ID"),
    db: AsyncSession = Depends(get_db)
):
    """
    Pre-booking price estimate for a stored bike.

    Returns 422 with a pricing error code when the window cannot be priced.
    """
    breakdown = await RentalBillingService.quote(
        db,
        bike_id,
        request.pickup_time,
        request.dropoff_time,
        request.pricing_type,
        request.actual_distance,
    )
    return EstimateResponse(bike_id=bike_id, currency=settings.currency, breakdown=breakdown)
