"""Ground model."""
from sqlalchemy import Column, Integer, String, Float, Boolean, ForeignKey, DateTime, Numeric, JSON, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from groundbook.core.database import Base


class Ground(Base):
    """Represents a bookable sports ground listed by an owner."""

    __tablename__ = "grounds"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    thumbnail = Column(String, nullable=True)
    images = Column(JSON, nullable=False, default=list)  # Media references, e.g. "/uploads/123-pitch.jpg"
    price_amount = Column(Numeric(10, 2), nullable=False, default=0)
    price_currency = Column(String(3), nullable=False, default="INR")
    price_negotiable = Column(Boolean, nullable=False, default=False)
    sport_tags = Column(JSON, nullable=False, default=list)
    facility_tags = Column(JSON, nullable=False, default=list)
    address = Column(String, nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    # False only while a confirmed booking occupies the ground; maintained by the booking workflow
    available = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    owner = relationship("User", back_populates="grounds")
    bookings = relationship("Booking", back_populates="ground")

    @property
    def price(self) -> dict:
        return {
            "amount": self.price_amount,
            "currency": self.price_currency,
            "negotiable": self.price_negotiable,
        }

    @property
    def location(self) -> dict:
        return {
            "address": self.address,
            "lat": self.latitude,
            "lng": self.longitude,
        }
