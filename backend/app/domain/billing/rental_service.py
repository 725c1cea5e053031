"""
Rental Billing Service (Domain Logic).

Runs the pricing engine at every point a rental is priced:
booking (estimate), payment confirmation and ride completion (settlement).
Cancellation withdraws a rental without re-pricing it.
Flushes only; the caller owns the transaction.
"""

import logging
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from backend.app.core.exceptions import (
    ActiveRentalExistsError,
    BikeUnavailableError,
    InvalidRentalStateError,
    InvalidRentalWindowError,
    ResourceNotFoundError,
)
from backend.app.domain.billing.bike_pricing import bike_to_pricing_configuration
from backend.app.domain.pricing.engine import calculate_price
from backend.app.domain.pricing.models import PriceBreakdown, PricingType
from backend.app.models.bike import Bike
from backend.app.models.rental import Rental
from backend.app.models.rental_enums import ACTIVE_RENTAL_STATUSES, PaymentStatus, RentalStatus

logger = logging.getLogger("bike_rental.billing")


def rental_window(pickup: datetime, dropoff: datetime) -> Tuple[datetime, datetime]:
    """
    Validate a rental window and return it as naive wall-clock times.

    Dropoff is converted to the pickup's UTC offset first, so both ends are read
    on the clock the customer booked in.

    Raises:
        InvalidRentalWindowError: Mixed naive/aware times, or dropoff <= pickup
    """
    if (pickup.tzinfo is None) != (dropoff.tzinfo is None):
        raise InvalidRentalWindowError("Pickup and dropoff must both carry a UTC offset or neither")
    if pickup.tzinfo is not None:
        dropoff = dropoff.astimezone(pickup.tzinfo)

    pickup, dropoff = pickup.replace(tzinfo=None), dropoff.replace(tzinfo=None)
    if dropoff <= pickup:
        raise InvalidRentalWindowError()
    return pickup, dropoff


class RentalBillingService:

    @staticmethod
    async def get_bike(db: AsyncSession, bike_id: int) -> Bike:
        bike = await db.get(Bike, bike_id)
        if not bike:
            raise ResourceNotFoundError("Bike", bike_id)
        return bike

    @staticmethod
    async def get_rental(db: AsyncSession, rental_id: int) -> Rental:
        rental = await db.get(Rental, rental_id)
        if not rental:
            raise ResourceNotFoundError("Rental", rental_id)
        return rental

    @staticmethod
    async def quote(
        db: AsyncSession,
        bike_id: int,
        pickup: datetime,
        dropoff: datetime,
        requested_type: Optional[PricingType] = None,
        actual_distance: Optional[Decimal] = None,
    ) -> PriceBreakdown:
        """
        Price a window for a stored bike without creating anything.

        Raises:
            ResourceNotFoundError: Unknown bike
            InvalidRentalWindowError: dropoff <= pickup
            PricingError: The engine cannot price the window
        """
        pickup, dropoff = rental_window(pickup, dropoff)
        bike = await RentalBillingService.get_bike(db, bike_id)
        config = bike_to_pricing_configuration(bike)
        return calculate_price(config, pickup, dropoff, requested_type, actual_distance)

    @staticmethod
    async def create_booking(
        db: AsyncSession,
        bike_id: int,
        customer_ref: str,
        pickup: datetime,
        dropoff: datetime,
        requested_type: Optional[PricingType] = None,
    ) -> Rental:
        """
        Book a bike and store the estimate.

        Flow:
        1. Validate window
        2. Bike exists and is available
        3. Customer holds no active rental
        4. Price the window (estimate, no distance)
        5. Create Rental (PENDING)
        """
        pickup, dropoff = rental_window(pickup, dropoff)
        bike = await RentalBillingService.get_bike(db, bike_id)
        if not bike.is_available:
            raise BikeUnavailableError(bike_id)

        # Check-then-act against the store; a unique index per active customer
        # would be needed to close the race completely.
        result = await db.execute(
            select(Rental).where(
                Rental.customer_ref == customer_ref,
                Rental.status.in_(ACTIVE_RENTAL_STATUSES),
            ).limit(1)
        )
        active = result.scalar_one_or_none()
        if active:
            raise ActiveRentalExistsError(customer_ref, active.id)

        breakdown = calculate_price(
            bike_to_pricing_configuration(bike), pickup, dropoff, requested_type
        )

        rental = Rental(
            booking_id=f"BK-{uuid.uuid4().hex[:12].upper()}",
            bike_id=bike.id,
            customer_ref=customer_ref,
            pickup_time=pickup,
            dropoff_time=dropoff,
            requested_pricing_type=requested_type.value if requested_type else None,
            resolved_pricing_type=breakdown.resolved_pricing_type.value,
            estimated_total=breakdown.total,
            subtotal=breakdown.subtotal,
            tax_amount=breakdown.tax_amount,
            total_amount=breakdown.total,
            status=RentalStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
        )
        db.add(rental)
        await db.flush()

        logger.info(
            "Rental booked",
            extra={"rental_id": rental.id, "bike_id": bike.id, "estimated_total": str(breakdown.total)},
        )
        return rental

    @staticmethod
    async def confirm_payment(db: AsyncSession, rental_id: int, payment_reference: str) -> Rental:
        """
        Mark a rental paid after the gateway verified the payment, and settle its price.

        Idempotent: an already-paid rental is returned unchanged.
        """
        rental = await RentalBillingService.get_rental(db, rental_id)

        if rental.payment_status == PaymentStatus.PAID:
            return rental

        if rental.status != RentalStatus.PENDING:
            raise InvalidRentalStateError(rental.id, rental.status.value, RentalStatus.PENDING.value)

        breakdown = await RentalBillingService._settle(db, rental, actual_distance=None)

        rental.payment_status = PaymentStatus.PAID
        rental.payment_reference = payment_reference
        rental.status = RentalStatus.CONFIRMED
        rental.paid_at = datetime.utcnow()
        await db.flush()

        logger.info(
            "Rental payment confirmed",
            extra={"rental_id": rental.id, "total": str(breakdown.total)},
        )
        return rental

    @staticmethod
    async def complete_rental(
        db: AsyncSession,
        rental_id: int,
        start_km: Decimal,
        end_km: Decimal,
    ) -> Rental:
        """
        Close a ride and settle it with the distance actually ridden.

        Idempotent: a completed rental is returned unchanged.
        """
        rental = await RentalBillingService.get_rental(db, rental_id)

        if rental.status == RentalStatus.COMPLETED:
            return rental

        if rental.status != RentalStatus.CONFIRMED:
            raise InvalidRentalStateError(rental.id, rental.status.value, RentalStatus.CONFIRMED.value)

        actual_distance = end_km - start_km
        breakdown = await RentalBillingService._settle(db, rental, actual_distance=actual_distance)

        rental.start_km = start_km
        rental.end_km = end_km
        rental.actual_distance = actual_distance
        rental.status = RentalStatus.COMPLETED
        rental.settled_at = datetime.utcnow()
        await db.flush()

        logger.info(
            "Rental settled",
            extra={
                "rental_id": rental.id,
                "actual_distance": str(actual_distance),
                "excess_distance_charge": str(breakdown.excess_distance_charge),
                "total": str(breakdown.total),
            },
        )
        return rental

    @staticmethod
    async def cancel_rental(db: AsyncSession, rental_id: int) -> Rental:
        """
        Withdraw a booked or paid rental before the ride is completed.

        Frees the customer to book again. Idempotent: a cancelled rental is
        returned unchanged.
        """
        rental = await RentalBillingService.get_rental(db, rental_id)

        if rental.status == RentalStatus.CANCELLED:
            return rental

        if rental.status not in ACTIVE_RENTAL_STATUSES:
            raise InvalidRentalStateError(
                rental.id,
                rental.status.value,
                " or ".join(status.value for status in ACTIVE_RENTAL_STATUSES),
            )

        rental.status = RentalStatus.CANCELLED
        rental.cancelled_at = datetime.utcnow()
        await db.flush()

        logger.info(
            "Rental cancelled",
            extra={"rental_id": rental.id, "payment_status": rental.payment_status.value},
        )
        return rental

    @staticmethod
    async def _settle(
        db: AsyncSession,
        rental: Rental,
        actual_distance: Optional[Decimal],
    ) -> PriceBreakdown:
        # Pricing is read fresh from the bike on every run
        bike = await RentalBillingService.get_bike(db, rental.bike_id)
        requested_type = (
            PricingType(rental.requested_pricing_type) if rental.requested_pricing_type else None
        )
        breakdown = calculate_price(
            bike_to_pricing_configuration(bike),
            rental.pickup_time,
            rental.dropoff_time,
            requested_type,
            actual_distance,
        )
        rental.resolved_pricing_type = breakdown.resolved_pricing_type.value
        rental.subtotal = breakdown.subtotal
        rental.tax_amount = breakdown.tax_amount
        rental.total_amount = breakdown.total
        return breakdown
