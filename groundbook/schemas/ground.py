"""Ground schemas."""
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer, field_validator
from typing import Annotated, Optional, List
from datetime import datetime
from decimal import Decimal

from groundbook.schemas.auth import UserSummary


def _clean_tags(value):
    """Accept a list or a comma separated string; strip, drop blanks and duplicates."""
    if value is None:
        return value
    if isinstance(value, str):
        value = value.split(",")
    tags = []
    for tag in value:
        tag = str(tag).strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


TagList = Annotated[List[str], BeforeValidator(_clean_tags)]

# Decimal in the database, plain number in JSON
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class Price(BaseModel):
    """Price of a ground."""

    amount: Money = Field(default=Decimal("0"), ge=0)
    currency: str = "INR"
    negotiable: bool = False


class Location(BaseModel):
    """Where a ground is."""

    address: Optional[str] = None
    lat: Optional[float] = Field(default=None, ge=-90, le=90)
    lng: Optional[float] = Field(default=None, ge=-180, le=180)


class GroundBase(BaseModel):
    """Base ground schema."""

    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    images: List[str] = []
    price: Price = Price()
    sport_tags: TagList = []
    facility_tags: TagList = []
    location: Location = Location()


class GroundCreate(GroundBase):
    """Schema for listing a new ground."""

    pass


class GroundUpdate(BaseModel):
    """Schema for updating a ground."""

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    images: Optional[List[str]] = None
    price: Optional[Price] = None
    sport_tags: Optional[TagList] = None
    facility_tags: Optional[TagList] = None
    location: Optional[Location] = None
    available: Optional[bool] = None

    @field_validator(
        "title", "images", "price", "sport_tags", "facility_tags", "location", "available",
        mode="before",
    )
    @classmethod
    def refuse_null(cls, value):
        # Omit a field to leave it unchanged; only description and thumbnail can be cleared
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class GroundOwner(UserSummary):
    """Owner details shown with a ground so renters can pay."""

    upi_id: Optional[str] = None


class GroundInDB(GroundBase):
    """Schema for ground from database."""

    id: int
    owner_id: int
    owner: Optional[GroundOwner] = None
    available: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class GroundSummary(BaseModel):
    """Short ground view embedded in bookings."""

    id: int
    title: str
    thumbnail: Optional[str] = None
    address: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
