"""User model."""
import enum

from sqlalchemy import Column, Integer, String, DateTime, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from groundbook.core.database import Base


class UserRole(str, enum.Enum):
    """Role fixed at signup."""

    RENTER = "renter"
    OWNER = "owner"


class User(Base):
    """Represents a renter or a ground owner."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=True)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    role = Column(
        Enum(UserRole, name="user_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=UserRole.RENTER,
    )
    upi_id = Column(String, nullable=True)  # Payout identifier, owners only
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    grounds = relationship("Ground", back_populates="owner")

    @property
    def is_owner(self) -> bool:
        return self.role == UserRole.OWNER
