"""Database models."""
from groundbook.models.user import User, UserRole
from groundbook.models.ground import Ground
from groundbook.models.booking import Booking, BookingStatus

__all__ = ["User", "UserRole", "Ground", "Booking", "BookingStatus"]
