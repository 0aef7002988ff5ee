"""Payment intent schemas."""
from pydantic import AliasChoices, BaseModel, Field
from typing import Optional
from decimal import Decimal


class PaymentIntentRequest(BaseModel):
    """Schema for building a UPI payment QR code."""

    upi_id: str = Field(..., min_length=1, validation_alias=AliasChoices("upi_id", "upiId"))
    name: Optional[str] = None
    amount: Decimal = Field(..., gt=0)
    note: Optional[str] = None


class PaymentIntentResponse(BaseModel):
    """Schema for a rendered payment QR code."""

    upi_str: str
    data_url: str
