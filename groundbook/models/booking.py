"""Booking model."""
import enum

from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Numeric, Enum, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from groundbook.core.database import Base


class BookingStatus(str, enum.Enum):
    """Lifecycle of a booking request. CONFIRMED and REJECTED are terminal."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"


class Booking(Base):
    """Represents a renter's request to occupy a ground for a time slot."""

    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    ground_id = Column(Integer, ForeignKey("grounds.id"), nullable=False, index=True)
    renter_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    # Copied from the ground when the booking is created
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    slot_from = Column(DateTime(timezone=True), nullable=True)
    slot_to = Column(DateTime(timezone=True), nullable=True)
    payment_proof = Column(String, nullable=True)
    status = Column(
        Enum(BookingStatus, name="booking_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=BookingStatus.PENDING,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    ground = relationship("Ground", back_populates="bookings")
    renter = relationship("User", foreign_keys=[renter_id])
    owner = relationship("User", foreign_keys=[owner_id])

    __table_args__ = (
        Index("ix_bookings_owner_status", "owner_id", "status"),
    )

    @property
    def timeslot(self) -> dict:
        return {"from": self.slot_from, "to": self.slot_to}

    @property
    def is_terminal(self) -> bool:
        return self.status != BookingStatus.PENDING
