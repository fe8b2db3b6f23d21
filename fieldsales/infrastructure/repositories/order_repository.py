import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from fieldsales.core import clock
from fieldsales.domain.models import (
    Customer, Item, OrderBooking, OrderBookingLine, RecentActivity,
)
from fieldsales.domain.rules import check_amount, line_amount
from fieldsales.domain.schemas import OrderSummary, OrderLineDetail
from fieldsales.interfaces.IOrderRepository import IOrderRepository

logger = logging.getLogger(__name__)


class SqlOrderRepository(IOrderRepository):
    """
    Booking headers, their lines and the recent-activity feed.

    Methods only flush; the caller owns the transaction (see unit_of_work).
    Totals are never stored on the header, they are computed on read.
    """

    def __init__(self, session: Session):
        self.session = session

    # --- Headers ---

    def create_booking(self, order_date: datetime, customer_id: int, order_no: str,
                       created_by: Optional[int] = None,
                       created_date: Optional[datetime] = None) -> int:
        booking = OrderBooking(
            order_date=order_date,
            customer_id=customer_id,
            order_no=order_no,
            created_by_id=created_by,
            created_date=created_date or clock.now(),
        )
        self.session.add(booking)
        self.session.flush()
        logger.info(f"🧾 Booking {booking.booking_id} created ({order_no}) for customer {customer_id}")
        return booking.booking_id

    def get_booking(self, booking_id: int) -> Optional[OrderBooking]:
        return self.session.get(OrderBooking, booking_id)

    # --- Lines ---

    def add_booking_line(self, booking_id: int, item_id: int, qty: int, unit_price: float,
                         amount: Optional[float] = None) -> OrderBookingLine:
        """Plain insert. Does not look for an existing (booking, item) line."""
        if amount is None:
            amount = line_amount(qty, unit_price)
        else:
            check_amount(qty, unit_price, amount)

        line = OrderBookingLine(
            booking_id=booking_id,
            item_id=item_id,
            order_qty=qty,
            unit_price=unit_price,
            amount=amount,
        )
        self.session.add(line)
        self.session.flush()
        return line

    def get_line_by_booking_and_item(self, booking_id: int, item_id: int) -> Optional[OrderBookingLine]:
        return (
            self.session.query(OrderBookingLine)
            .filter(OrderBookingLine.booking_id == booking_id, OrderBookingLine.item_id == item_id)
            .order_by(OrderBookingLine.line_id)
            .first()
        )

    def add_or_merge_line(self, booking_id: int, item_id: int, qty: int,
                          unit_price: float) -> OrderBookingLine:
        """
        Merge policy for a repeated item: quantities add up and the amount is
        recomputed at the unit price captured by the existing line. The new
        unit_price only applies when no line exists yet.
        """
        existing = self.get_line_by_booking_and_item(booking_id, item_id)
        if existing is None:
            return self.add_booking_line(booking_id, item_id, qty, unit_price)

        existing.order_qty = existing.order_qty + qty
        existing.amount = line_amount(existing.order_qty, existing.unit_price)
        self.session.flush()
        logger.info(f"➕ Merged item {item_id} into line {existing.line_id} (qty {existing.order_qty})")
        return existing

    def update_booking_line(self, line_id: int, qty: int,
                            amount: Optional[float] = None) -> Optional[OrderBookingLine]:
        line = self.session.get(OrderBookingLine, line_id)
        if line is None:
            return None

        if amount is None:
            amount = line_amount(qty, line.unit_price)
        else:
            check_amount(qty, line.unit_price, amount)

        line.order_qty = qty
        line.amount = amount
        self.session.flush()
        return line

    def delete_booking_line(self, line_id: int) -> bool:
        line = self.session.get(OrderBookingLine, line_id)
        if line is None:
            return False
        self.session.delete(line)
        self.session.flush()
        logger.info(f"🗑️ Line {line_id} removed from booking {line.booking_id}")
        return True

    # --- Aggregates ---

    def _summary_query(self):
        return (
            select(
                OrderBooking.booking_id,
                OrderBooking.order_no,
                OrderBooking.order_date,
                OrderBooking.customer_id,
                Customer.name.label("customer_name"),
                func.count(OrderBookingLine.line_id).label("item_count"),
                func.coalesce(func.sum(OrderBookingLine.amount), 0).label("total_amount"),
            )
            .select_from(OrderBooking)
            .outerjoin(Customer, Customer.entity_id == OrderBooking.customer_id)
            .outerjoin(OrderBookingLine, OrderBookingLine.booking_id == OrderBooking.booking_id)
            .group_by(
                OrderBooking.booking_id,
                OrderBooking.order_no,
                OrderBooking.order_date,
                OrderBooking.customer_id,
                Customer.name,
            )
            .order_by(desc(OrderBooking.booking_id))
        )

    def list_orders(self) -> List[OrderSummary]:
        rows = self.session.execute(self._summary_query()).all()
        return [OrderSummary.model_validate(row) for row in rows]

    def list_orders_by_customer(self, customer_id: int) -> List[OrderSummary]:
        query = self._summary_query().where(OrderBooking.customer_id == customer_id)
        rows = self.session.execute(query).all()
        return [OrderSummary.model_validate(row) for row in rows]

    def get_order_details(self, booking_id: int) -> List[OrderLineDetail]:
        query = (
            select(
                OrderBookingLine.line_id,
                OrderBookingLine.item_id,
                Item.name.label("item_name"),
                OrderBookingLine.order_qty,
                OrderBookingLine.unit_price,
                OrderBookingLine.amount,
            )
            .select_from(OrderBookingLine)
            .outerjoin(Item, Item.id == OrderBookingLine.item_id)
            .where(OrderBookingLine.booking_id == booking_id)
            .order_by(OrderBookingLine.line_id)
        )
        return [OrderLineDetail.model_validate(row) for row in self.session.execute(query).all()]

    # --- Recent activity feed ---

    def record_recent_activity(self, booking_id: int, customer_name: str, item_count: int,
                               total_amount: float) -> RecentActivity:
        entry = RecentActivity(
            booking_id=booking_id,
            customer_name=customer_name,
            item_count=item_count,
            total_amount=total_amount,
            activity_date=clock.now(),
        )
        self.session.add(entry)
        self.session.flush()
        return entry

    def list_recent_activity(self, limit: int = 10) -> List[RecentActivity]:
        return (
            self.session.query(RecentActivity)
            .order_by(desc(RecentActivity.activity_date), desc(RecentActivity.id))
            .limit(limit)
            .all()
        )
