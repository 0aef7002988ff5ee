"""Booking endpoints."""
from typing import List
from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from groundbook.api.deps import get_current_user
from groundbook.core.database import get_db
from groundbook.models.user import User
from groundbook.schemas.booking import BookingCreate, BookingDecision, BookingInDB
from groundbook.services.booking_service import booking_service

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


@router.post("", response_model=BookingInDB, status_code=201)
async def request_booking(
    request: BookingCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Request a booking for an available ground.

    The booking starts out ``pending`` and the ground stays listed until its
    owner confirms a request. Owners cannot book grounds.

    Args:
        request: Ground ID, optional amount (defaults to the ground's price)
            and the requested ``from``/``to`` slot
    """
    return await booking_service.request_booking(
        db,
        user,
        request.ground_id,
        amount=request.amount,
        slot_from=request.from_,
        slot_to=request.to,
    )


@router.get("", response_model=List[BookingInDB])
async def booking_history(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List every booking the caller has requested."""
    return await booking_service.renter_history(db, user)


@router.get("/owner", response_model=List[BookingInDB])
async def owner_queue(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    List booking requests for the caller's grounds.

    Pending and rejected bookings are listed; confirmed ones are not.
    """
    return await booking_service.owner_queue(db, user)


@router.get("/{booking_id}", response_model=BookingInDB)
async def get_booking(
    booking_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get a booking the caller made or received."""
    return await booking_service.get_for_participant(db, user, booking_id)


@router.post("/{booking_id}/confirm", response_model=BookingDecision)
async def confirm_booking(
    booking_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Confirm a pending booking. The ground stops being listed."""
    booking = await booking_service.confirm(db, user, booking_id)
    return BookingDecision(message="Booking confirmed", booking=BookingInDB.model_validate(booking))


@router.post("/{booking_id}/reject", response_model=BookingDecision)
async def reject_booking(
    booking_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Reject a pending booking. The ground is listed again."""
    booking = await booking_service.reject(db, user, booking_id)
    return BookingDecision(message="Booking rejected", booking=BookingInDB.model_validate(booking))


@router.post("/{booking_id}/payment-proof", response_model=BookingInDB)
async def upload_payment_proof(
    booking_id: int,
    screenshot: UploadFile = File(...),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Attach a screenshot of the UPI payment to a booking."""
    return await booking_service.attach_payment_proof(db, user, booking_id, screenshot)
