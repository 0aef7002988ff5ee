"""Booking schemas."""
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator
from typing import Optional
from datetime import datetime

from groundbook.models.booking import BookingStatus
from groundbook.schemas.auth import UserSummary
from groundbook.schemas.ground import GroundSummary, Money


class Timeslot(BaseModel):
    """Time window a booking asks for. Serialized as ``{"from": ..., "to": ...}``."""

    from_: Optional[datetime] = Field(default=None, alias="from")
    to: Optional[datetime] = None

    model_config = ConfigDict(populate_by_name=True)


class BookingCreate(BaseModel):
    """Schema for requesting a booking."""

    ground_id: int = Field(..., validation_alias=AliasChoices("ground_id", "groundId"))
    amount: Optional[Money] = Field(default=None, gt=0)
    from_: Optional[datetime] = Field(default=None, alias="from")
    to: Optional[datetime] = None

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="after")
    def check_slot_order(self):
        if self.from_ is not None and self.to is not None and self.to < self.from_:
            raise ValueError("'to' must not be earlier than 'from'")
        return self


class BookingInDB(BaseModel):
    """Schema for booking from database."""

    id: int
    ground_id: int
    ground: Optional[GroundSummary] = None
    renter_id: int
    renter: Optional[UserSummary] = None
    owner_id: int
    amount: Money
    timeslot: Timeslot
    payment_proof: Optional[str] = None
    status: BookingStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class BookingDecision(BaseModel):
    """Schema returned by confirm and reject."""

    message: str
    booking: BookingInDB
