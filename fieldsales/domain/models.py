from sqlalchemy import (
    Column, Integer, String, Float, Date, DateTime, ForeignKey, UniqueConstraint, Enum,
)
from sqlalchemy.sql import func

from fieldsales.core import clock
from fieldsales.domain.enums import VisitStatus
from fieldsales.infrastructure.database import Base


def _visit_status_column(**kwargs):
    # Stored as the label ("Visited"/"Unvisited"), never as 0/1
    return Column(
        Enum(VisitStatus, native_enum=False, length=16,
             values_callable=lambda e: [m.value for m in e]),
        default=VisitStatus.UNVISITED,
        nullable=False,
        **kwargs,
    )


class Customer(Base):
    __tablename__ = "customer"

    entity_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False, index=True)
    phone = Column(String)
    last_seen = Column(DateTime)
    visited = _visit_status_column()

    # Geolocation; both null until the first location update
    latitude = Column(Float)
    longitude = Column(Float)
    location_status = Column(String)


class Item(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False, index=True)
    price = Column(Float, nullable=False)
    type = Column(String)
    image = Column(String)


class OrderBooking(Base):
    __tablename__ = "order_booking"

    booking_id = Column(Integer, primary_key=True, autoincrement=True)
    order_date = Column(DateTime, nullable=False)
    customer_id = Column(Integer, ForeignKey("customer.entity_id"), nullable=False, index=True)
    order_no = Column(String, index=True)
    created_by_id = Column(Integer)
    created_date = Column(DateTime, server_default=func.now())


class OrderBookingLine(Base):
    __tablename__ = "order_booking_line"

    line_id = Column(Integer, primary_key=True, autoincrement=True)
    booking_id = Column(Integer, ForeignKey("order_booking.booking_id"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False)
    order_qty = Column(Integer, nullable=False)
    unit_price = Column(Float, nullable=False)
    amount = Column(Float, nullable=False)  # always order_qty * unit_price


class ActivityLog(Base):
    __tablename__ = "activity_log"
    __table_args__ = (UniqueConstraint("customer_id", "date", name="uq_activity_customer_day"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey("customer.entity_id"), nullable=False)
    customer_name = Column(String)
    date = Column(Date, nullable=False, index=True)
    status = _visit_status_column()


class RecentActivity(Base):
    __tablename__ = "recent_activity"

    id = Column(Integer, primary_key=True, autoincrement=True)
    booking_id = Column(Integer)
    customer_name = Column(String)
    item_count = Column(Integer, default=0)
    total_amount = Column(Float, default=0)
    activity_date = Column(DateTime, default=clock.now, index=True)


class CustomerReceipt(Base):
    __tablename__ = "customer_receipt"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey("customer.entity_id"), nullable=False)
    cash_bank_id = Column(String, nullable=False)
    amount = Column(Float, nullable=False)
    note = Column(String)
    attachment = Column(String)  # opaque reference to the picked document
    created_at = Column(DateTime, default=clock.now)
