"""
Pydantic schemas for booking requests

Date and time strings are parsed by the booking service so malformed values
surface as InvalidInput (HTTP 400) like query parameters do.
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class SlotRequestMixin(BaseModel):
    date: str = Field(..., description="Date in YYYY-MM-DD format")
    time: str = Field(..., description="Slot start time in HH:MM format")


class BookingCreateRequest(SlotRequestMixin):
    customer_name: str = Field(..., min_length=1, max_length=200, alias="customerName")
    customer_email: EmailStr = Field(..., alias="customerEmail")
    customer_phone: Optional[str] = Field(None, max_length=30, alias="customerPhone")
    service_type: Optional[str] = Field(None, max_length=100, alias="serviceType")
    notes: Optional[str] = Field(None, max_length=2000)

    model_config = {"populate_by_name": True}


class BookingCancelRequest(BaseModel):
    reason: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = Field(None, max_length=2000)


class BookingRescheduleRequest(SlotRequestMixin):
    notes: Optional[str] = Field(None, max_length=2000)
