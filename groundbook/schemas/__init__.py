"""API schemas."""
from groundbook.schemas.auth import (
    SignupRequest,
    LoginRequest,
    UserSummary,
    UserPublic,
    TokenResponse,
)
from groundbook.schemas.ground import (
    Price,
    Location,
    GroundCreate,
    GroundUpdate,
    GroundInDB,
    GroundSummary,
)
from groundbook.schemas.booking import (
    Timeslot,
    BookingCreate,
    BookingInDB,
    BookingDecision,
)
from groundbook.schemas.payment import (
    PaymentIntentRequest,
    PaymentIntentResponse,
)

__all__ = [
    "SignupRequest",
    "LoginRequest",
    "UserSummary",
    "UserPublic",
    "TokenResponse",
    "Price",
    "Location",
    "GroundCreate",
    "GroundUpdate",
    "GroundInDB",
    "GroundSummary",
    "Timeslot",
    "BookingCreate",
    "BookingInDB",
    "BookingDecision",
    "PaymentIntentRequest",
    "PaymentIntentResponse",
]
