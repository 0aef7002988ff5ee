"""UPI payment QR endpoints."""
from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from groundbook.api.deps import get_current_user
from groundbook.core.database import get_db
from groundbook.core.errors import NotFound
from groundbook.models.user import User
from groundbook.schemas.payment import PaymentIntentRequest, PaymentIntentResponse
from groundbook.services.booking_service import booking_service
from groundbook.services.payment_intent import build_payment_intent, render_qr_png, to_data_url

router = APIRouter(prefix="/api", tags=["payments"])


@router.post("/upi-qrcode", response_model=PaymentIntentResponse)
async def create_upi_qrcode(request: PaymentIntentRequest):
    """
    Build a UPI payment link and its QR code.

    Nothing is charged: the renter scans the code with a UPI app and pays the
    owner directly.

    Returns:
        The ``upi://pay`` link and a PNG ``data:`` URL of its QR code
    """
    upi_str = build_payment_intent(request.upi_id, request.name, request.amount, request.note)
    png = await render_qr_png(upi_str)
    return PaymentIntentResponse(upi_str=upi_str, data_url=to_data_url(png))


@router.post(
    "/upi-qrcode/image",
    response_class=Response,
    responses={200: {"content": {"image/png": {}}}},
)
async def create_upi_qrcode_image(request: PaymentIntentRequest):
    """Same as ``/upi-qrcode`` but returns the PNG itself."""
    upi_str = build_payment_intent(request.upi_id, request.name, request.amount, request.note)
    png = await render_qr_png(upi_str)
    return Response(content=png, media_type="image/png")


@router.get("/bookings/{booking_id}/payment-qr", response_model=PaymentIntentResponse)
async def booking_payment_qr(
    booking_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    QR code for paying the owner of a booking's ground.

    Uses the owner's UPI id and name, the booking amount and a
    ``Booking <ground title>`` note.
    """
    booking = await booking_service.get_for_participant(db, user, booking_id)
    if not booking.owner.upi_id:
        raise NotFound("Owner has not provided a UPI id")

    upi_str = build_payment_intent(
        booking.owner.upi_id,
        booking.owner.name,
        booking.amount,
        f"Booking {booking.ground.title}",
    )
    png = await render_qr_png(upi_str)
    return PaymentIntentResponse(upi_str=upi_str, data_url=to_data_url(png))
