# backend/rentalhub/schemas/booking.py
from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field

from rentalhub.schemas.identity import IdentityOut


# ---------------------------
# Request
# ---------------------------

class BookingLineCreate(BaseModel):
    item_id: int
    quantity: int = Field(..., ge=1)


class BookingCustomerCreate(BaseModel):
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: EmailStr
    delivery_address: str = ""
    notes: Optional[str] = None


class BookingCreate(BaseModel):
    start_date: date
    end_date: date
    delivery_type: Literal["pickup", "delivery"]
    items: List[BookingLineCreate]
    customer: BookingCustomerCreate
    discount: int = Field(0, ge=0)


# ---------------------------
# Response
# ---------------------------

class BookingOut(BaseModel):
    id: int
    user_id: int
    host_id: int
    identity_id: Optional[int] = None
    identity_status: Optional[str] = None
    status: str
    locked_until: datetime
    # computed on every read, never stored
    time_remaining_minutes: int = 0
    start_date: date
    end_date: date
    total_days: int
    delivery_type: str
    rental: int
    deposit: int
    discount: int
    total: int
    outstanding: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BookingItemOut(BaseModel):
    id: int
    booking_id: int
    item_id: int
    name: str
    quantity: int
    price_per_day: int
    deposit_per_unit: int
    subtotal_rental: int
    subtotal_deposit: int

    model_config = {"from_attributes": True}


class BookingCustomerOut(BaseModel):
    id: int
    booking_id: int
    name: str
    phone: str
    email: str
    delivery_address: str
    notes: Optional[str] = None

    model_config = {"from_attributes": True}


class BookingDetail(BaseModel):
    booking: BookingOut
    items: List[BookingItemOut]
    customer: Optional[BookingCustomerOut] = None
    identity: Optional[IdentityOut] = None


class BookingSummary(BaseModel):
    booking_id: int
    start_date: date
    end_date: date
    total: int
    status: str
    item_names: str
    total_items: int
    created_at: datetime


class HostBookingSummary(BookingSummary):
    customer_name: str


class HostCustomer(BaseModel):
    """A renter who has booked with the host, as last seen on their bookings."""
    user_id: int
    name: str
    email: str
    phone: str
    # identity record the chosen booking referenced
    identity_id: Optional[int] = None
    identity_status: Optional[str] = None
    document_url: Optional[str] = None
    reason: Optional[str] = None
    uploaded_at: Optional[datetime] = None
