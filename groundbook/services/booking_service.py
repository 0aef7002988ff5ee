"""Booking workflow: requests, owner decisions and ground availability.

Every booking starts ``pending``. The ground's owner either confirms it
(booking ``confirmed``, ground no longer available) or rejects it (booking
``rejected``, ground available again). Both decisions are terminal.

Requesting a booking never touches availability, so several renters may
hold pending requests for the same ground at once. Confirming is the only
step that takes a ground off the market and the owner is expected to reject
competing requests. Rejecting always puts the ground back on the market,
even if another booking for it was confirmed earlier.

The status change and the availability change of a decision are committed
together; if either write fails both are rolled back.
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from groundbook.core.config import settings
from groundbook.core.errors import (
    Forbidden,
    ForbiddenRole,
    InvalidTransition,
    ListingUnavailable,
    NotFound,
)
from groundbook.models.booking import Booking, BookingStatus
from groundbook.models.user import User
from groundbook.services.ground_service import ground_service, require_owner
from groundbook.services.storage import upload_storage

logger = logging.getLogger(__name__)


class BookingService:
    """Service for the booking lifecycle."""

    def __init__(self, enforce_reject_ownership: bool = True):
        self.enforce_reject_ownership = enforce_reject_ownership

    async def request_booking(
        self,
        db: AsyncSession,
        renter: User,
        ground_id: int,
        amount: Optional[Decimal] = None,
        slot_from: Optional[datetime] = None,
        slot_to: Optional[datetime] = None,
    ) -> Booking:
        """
        Create a pending booking request.

        Args:
            db: Database session
            renter: Requesting user
            ground_id: Ground to book
            amount: Offered amount, defaults to the ground's price
            slot_from: Start of the requested slot
            slot_to: End of the requested slot

        Returns:
            The pending booking

        Raises:
            ForbiddenRole: If the caller is an owner
            NotFound: If the ground does not exist
            ListingUnavailable: If the ground is not available
        """
        # Checked first so owners are refused whatever state the ground is in
        if renter.is_owner:
            raise ForbiddenRole("Owners cannot book grounds")

        ground = await ground_service.get_by_id(db, ground_id)
        if not ground.available:
            raise ListingUnavailable()

        booking = Booking(
            ground_id=ground.id,
            renter_id=renter.id,
            owner_id=ground.owner_id,
            amount=amount if amount is not None else ground.price_amount,
            slot_from=slot_from,
            slot_to=slot_to,
            status=BookingStatus.PENDING,
        )
        db.add(booking)
        await db.commit()

        logger.info(
            f"Renter {renter.id} requested booking {booking.id} for ground {ground.id}"
        )
        return await self.get_by_id(db, booking.id)

    async def get_by_id(
        self, db: AsyncSession, booking_id: int, for_update: bool = False
    ) -> Booking:
        """
        Get a booking with its ground, renter and owner loaded.

        Raises:
            NotFound: If the booking does not exist
        """
        query = (
            select(Booking)
            .options(
                selectinload(Booking.ground),
                selectinload(Booking.renter),
                selectinload(Booking.owner),
            )
            .where(Booking.id == booking_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            query = query.with_for_update()

        result = await db.execute(query)
        booking = result.scalar_one_or_none()

        if not booking:
            raise NotFound("Booking not found")

        return booking

    async def get_for_participant(
        self, db: AsyncSession, user: User, booking_id: int
    ) -> Booking:
        """Get a booking the user made or owns the ground of."""
        booking = await self.get_by_id(db, booking_id)
        if user.id not in (booking.renter_id, booking.owner_id):
            raise Forbidden("Not yours")
        return booking

    async def owner_queue(self, db: AsyncSession, owner: User) -> List[Booking]:
        """
        Bookings an owner still sees: pending and rejected, oldest first.

        Confirmed bookings drop out of the queue.
        """
        require_owner(owner)
        result = await db.execute(
            select(Booking)
            .options(selectinload(Booking.ground), selectinload(Booking.renter))
            .where(
                Booking.owner_id == owner.id,
                Booking.status != BookingStatus.CONFIRMED,
            )
            .order_by(Booking.id)
        )
        return list(result.scalars().all())

    async def renter_history(self, db: AsyncSession, renter: User) -> List[Booking]:
        """Every booking a user has requested, in any status."""
        result = await db.execute(
            select(Booking)
            .options(selectinload(Booking.ground), selectinload(Booking.renter))
            .where(Booking.renter_id == renter.id)
            .order_by(Booking.id)
        )
        return list(result.scalars().all())

    async def confirm(self, db: AsyncSession, owner: User, booking_id: int) -> Booking:
        """
        Confirm a pending booking and take its ground off the market.

        Raises:
            ForbiddenRole: If the caller is not an owner
            NotFound: If the booking does not exist
            Forbidden: If the booking belongs to another owner
            InvalidTransition: If the booking is not pending
        """
        require_owner(owner)
        booking = await self.get_by_id(db, booking_id, for_update=True)

        if booking.owner_id != owner.id:
            raise Forbidden("Not yours")

        await self._decide(db, booking, BookingStatus.CONFIRMED, available=False)
        logger.info(
            f"Owner {owner.id} confirmed booking {booking.id}; "
            f"ground {booking.ground_id} is now unavailable"
        )
        return await self.get_by_id(db, booking_id)

    async def reject(self, db: AsyncSession, owner: User, booking_id: int) -> Booking:
        """
        Reject a pending booking and make its ground available again.

        The ground is made available even if another booking for it was
        confirmed before.

        Raises:
            ForbiddenRole: If the caller is not an owner
            NotFound: If the booking does not exist
            Forbidden: If the booking belongs to another owner and ownership
                is enforced (``ENFORCE_REJECT_OWNERSHIP``)
            InvalidTransition: If the booking is not pending
        """
        require_owner(owner)
        booking = await self.get_by_id(db, booking_id, for_update=True)

        if booking.owner_id != owner.id:
            if self.enforce_reject_ownership:
                raise Forbidden("Not yours")
            logger.warning(
                f"Owner {owner.id} is rejecting booking {booking.id} "
                f"which belongs to owner {booking.owner_id}"
            )

        await self._decide(db, booking, BookingStatus.REJECTED, available=True)
        logger.info(
            f"Owner {owner.id} rejected booking {booking.id}; "
            f"ground {booking.ground_id} is available"
        )
        return await self.get_by_id(db, booking_id)

    async def attach_payment_proof(
        self, db: AsyncSession, renter: User, booking_id: int, upload: UploadFile
    ) -> Booking:
        """
        Store a payment screenshot for a booking.

        Raises:
            NotFound: If the booking does not exist
            Forbidden: If the caller did not make the booking
        """
        booking = await self.get_by_id(db, booking_id)
        if booking.renter_id != renter.id:
            raise Forbidden("Not yours")

        booking.payment_proof = await upload_storage.save(upload)
        await db.commit()

        logger.info(f"Renter {renter.id} attached payment proof to booking {booking.id}")
        return await self.get_by_id(db, booking_id)

    async def _decide(
        self,
        db: AsyncSession,
        booking: Booking,
        status: BookingStatus,
        available: bool,
    ) -> None:
        """Move a pending booking to a terminal status and set its ground's availability in one commit."""
        if booking.status != BookingStatus.PENDING:
            raise InvalidTransition(
                f"Booking {booking.id} is already {booking.status.value}"
            )

        try:
            ground = await ground_service.get_by_id(db, booking.ground_id, for_update=True)
            booking.status = status
            ground_service.set_available(ground, available)
            await db.commit()
        except Exception as e:
            logger.error(
                f"Failed to mark booking {booking.id} {status.value}; rolled back: {e}",
                exc_info=True,
            )
            await db.rollback()
            raise


# Singleton instance
booking_service = BookingService(
    enforce_reject_ownership=settings.ENFORCE_REJECT_OWNERSHIP,
)
