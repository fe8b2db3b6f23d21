"""
Request/response schemas for the ledger API.

Row-backed models set from_attributes so they can be built straight from
SQLAlchemy objects or result rows.
"""

from datetime import date as Date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fieldsales.domain.enums import VisitStatus


class _RowModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Customers
class CustomerCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Customer name")
    phone: Optional[str] = Field(None, description="Phone number")
    last_seen: Optional[datetime] = Field(None, description="Last contact timestamp")
    visited: VisitStatus = Field(VisitStatus.UNVISITED, description="Visited/Unvisited (0/1 accepted)")

    @field_validator("visited", mode="before")
    @classmethod
    def _coerce_visited(cls, v):
        return VisitStatus.coerce(v)


class CustomerOut(_RowModel):
    entity_id: int
    name: str
    phone: Optional[str] = None
    last_seen: Optional[datetime] = None
    visited: VisitStatus
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    location_status: Optional[str] = None


class VisitedUpdate(BaseModel):
    visited: VisitStatus

    @field_validator("visited", mode="before")
    @classmethod
    def _coerce_visited(cls, v):
        return VisitStatus.coerce(v)


class LocationUpdate(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    location_status: Optional[str] = Field("Updated", description="Location update status label")


# Items
class ItemCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Item name")
    price: float = Field(..., description="Unit price")
    type: Optional[str] = Field(None, description="Category/type tag")
    image: Optional[str] = Field(None, description="Image reference")


class ItemOut(_RowModel):
    id: int
    name: str
    price: float
    type: Optional[str] = None
    image: Optional[str] = None


# Bookings
class LineRequest(BaseModel):
    item_id: int
    order_qty: int
    unit_price: Optional[float] = Field(None, description="Defaults to the catalog price")


class BookingCreate(BaseModel):
    customer_id: int
    created_by_id: Optional[int] = None
    order_date: Optional[datetime] = None
    lines: List[LineRequest] = []


class BookingLinesAdd(BaseModel):
    lines: List[LineRequest] = Field(..., min_length=1)


class LineUpdate(BaseModel):
    order_qty: int
    amount: Optional[float] = Field(None, description="Must equal order_qty x unit_price when given")


class LineOut(_RowModel):
    line_id: int
    booking_id: int
    item_id: int
    order_qty: int
    unit_price: float
    amount: float


class BookingResult(BaseModel):
    booking_id: int
    order_no: str
    customer_id: int
    total_qty: int
    total_amount: float


class OrderSummary(_RowModel):
    booking_id: int
    order_no: Optional[str] = None
    order_date: Optional[datetime] = None
    customer_id: Optional[int] = None
    customer_name: Optional[str] = None
    item_count: int = 0
    total_amount: float = 0


class OrderLineDetail(_RowModel):
    line_id: int
    item_id: int
    item_name: Optional[str] = None
    order_qty: int
    unit_price: float
    amount: float


# Activity
class ActivityLogOut(_RowModel):
    id: int
    customer_id: int
    customer_name: Optional[str] = None
    date: Date
    status: VisitStatus


class RecentActivityOut(_RowModel):
    id: int
    booking_id: Optional[int] = None
    customer_name: Optional[str] = None
    item_count: int
    total_amount: float
    activity_date: datetime


# Receipts
class ReceiptCreate(BaseModel):
    cash_bank_id: str = Field(..., min_length=1, description="Cash/Bank account id")
    amount: float = Field(..., description="Amount recovered")
    note: Optional[str] = None
    attachment: Optional[str] = Field(None, description="Reference to the receipt document")


class ReceiptOut(_RowModel):
    id: int
    customer_id: int
    customer_name: Optional[str] = None
    cash_bank_id: str
    amount: float
    note: Optional[str] = None
    attachment: Optional[str] = None
    created_at: datetime
