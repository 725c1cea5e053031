"""
Rental API Endpoints.

Booking, payment confirmation, ride completion and cancellation. Pricing steps
re-price the rental through RentalBillingService; every step commits here.
"""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db.session import get_db
from backend.app.domain.billing.rental_service import RentalBillingService
from backend.app.schemas.rental import (
    RentalCreate, PaymentConfirmation, RentalCompletion, RentalResponse
)

router = APIRouter(prefix="/rentals", tags=["Rentals"])


@router.post("", response_model=RentalResponse, status_code=status.HTTP_201_CREATED)
async def create_rental(
    rental_data: RentalCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Book a bike for a window. The estimate is stored on the rental.
    """
    rental = await RentalBillingService.create_booking(
        db,
        bike_id=rental_data.bike_id,
        customer_ref=rental_data.customer_ref,
        pickup=rental_data.pickup_time,
        dropoff=rental_data.dropoff_time,
        requested_type=rental_data.pricing_type,
    )
    await db.commit()
    await db.refresh(rental)
    return RentalResponse.model_validate(rental)


@router.get("/{rental_id}", response_model=RentalResponse)
async def get_rental(
    rental_id: int = Path(..., description="Rental ID"),
    db: AsyncSession = Depends(get_db)
):
    """Get a single rental."""
    rental = await RentalBillingService.get_rental(db, rental_id)
    return RentalResponse.model_validate(rental)


@router.post("/{rental_id}/confirm-payment", response_model=RentalResponse)
async def confirm_payment(
    payment: PaymentConfirmation,
    rental_id: int = Path(..., description="Rental ID"),
    db: AsyncSession = Depends(get_db)
):
    """
    Confirm a gateway-verified payment and settle the rental price.
    """
    rental = await RentalBillingService.confirm_payment(db, rental_id, payment.payment_reference)
    await db.commit()
    await db.refresh(rental)
    return RentalResponse.model_validate(rental)


@router.post("/{rental_id}/complete", response_model=RentalResponse)
async def complete_rental(
    completion: RentalCompletion,
    rental_id: int = Path(..., description="Rental ID"),
    db: AsyncSession = Depends(get_db)
):
    """
    Close the ride and settle it with the distance actually ridden.
    """
    rental = await RentalBillingService.complete_rental(
        db, rental_id, completion.start_km, completion.end_km
    )
    await db.commit()
    await db.refresh(rental)
    return RentalResponse.model_validate(rental)


@router.post("/{rental_id}/cancel", response_model=RentalResponse)
async def cancel_rental(
    rental_id: int = Path(..., description="Rental ID"),
    db: AsyncSession = Depends(get_db)
):
    """
    Cancel a pending or confirmed rental.
    """
    rental = await RentalBillingService.cancel_rental(db, rental_id)
    await db.commit()
    await db.refresh(rental)
    return RentalResponse.model_validate(rental)
