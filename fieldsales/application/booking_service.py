import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from fieldsales.core import clock
from fieldsales.core.config import settings
from fieldsales.domain.exceptions import BookingNotFound, CustomerNotFound, ItemNotFound
from fieldsales.domain.rules import LineRules
from fieldsales.domain.schemas import BookingResult
from fieldsales.infrastructure.database import unit_of_work
from fieldsales.infrastructure.repositories.activity_repository import SqlActivityRepository
from fieldsales.infrastructure.repositories.customer_repository import SqlCustomerRepository
from fieldsales.infrastructure.repositories.item_repository import SqlItemRepository
from fieldsales.infrastructure.repositories.order_repository import SqlOrderRepository
from fieldsales.interfaces.IActivityRepository import IActivityRepository
from fieldsales.interfaces.ICustomerRepository import ICustomerRepository
from fieldsales.interfaces.IItemRepository import IItemRepository
from fieldsales.interfaces.IOrderRepository import IOrderRepository

logger = logging.getLogger(__name__)


@dataclass
class LineInput:
    item_id: int
    qty: int
    unit_price: Optional[float] = None  # None -> catalog price


def generate_order_no(prefix: Optional[str] = None) -> str:
    return f"{prefix or settings.ORDER_NO_PREFIX}-{int(time.time() * 1000)}"


class BookingService:
    """
    Checkout use cases. Each public method is one unit of work: either every
    row it touches is written or none is.
    """

    def __init__(self, session: Session,
                 order_repo: Optional[IOrderRepository] = None,
                 customer_repo: Optional[ICustomerRepository] = None,
                 item_repo: Optional[IItemRepository] = None,
                 activity_repo: Optional[IActivityRepository] = None,
                 rules: Optional[LineRules] = None):
        self.session = session
        self.order_repo = order_repo or SqlOrderRepository(session)
        self.customer_repo = customer_repo or SqlCustomerRepository(session)
        self.item_repo = item_repo or SqlItemRepository(session)
        self.activity_repo = activity_repo or SqlActivityRepository(session)
        self.rules = rules or LineRules.from_settings()

    def book_customer_order(self, customer_id: int, lines: Iterable[LineInput],
                            created_by: Optional[int] = None,
                            order_date: Optional[datetime] = None,
                            record_activity: bool = True) -> BookingResult:
        """
        Header + lines + visited flip + today's activity row + feed entry.
        A booked order is what "customer was visited today" means.
        """
        lines = list(lines)
        with unit_of_work(self.session):
            customer = self.customer_repo.get_customer(customer_id)
            if customer is None:
                raise CustomerNotFound(customer_id)

            priced = self._price_lines(lines)

            stamp = clock.now()
            order_no = generate_order_no()
            booking_id = self.order_repo.create_booking(
                order_date=order_date or stamp,
                customer_id=customer_id,
                order_no=order_no,
                created_by=created_by,
                created_date=stamp,
            )

            for line in priced:
                self.order_repo.add_or_merge_line(booking_id, line.item_id, line.qty, line.unit_price)

            self.customer_repo.mark_seen(customer_id, stamp)
            self.activity_repo.mark_visited(customer_id)

            # Feed counts units ordered, not distinct lines
            total_qty = sum(line.qty for line in priced)
            total_amount = sum(d.amount for d in self.order_repo.get_order_details(booking_id))
            if record_activity and priced:
                self.order_repo.record_recent_activity(
                    booking_id=booking_id,
                    customer_name=customer.name or "Customer",
                    item_count=total_qty,
                    total_amount=total_amount,
                )

        logger.info(f"✅ Order {order_no} booked for {customer.name}: {total_qty} units, {total_amount}")
        return BookingResult(
            booking_id=booking_id,
            order_no=order_no,
            customer_id=customer_id,
            total_qty=total_qty,
            total_amount=total_amount,
        )

    def create_booking(self, customer_id: int, created_by: Optional[int] = None) -> BookingResult:
        """Empty header with the visited side effects; lines come later."""
        return self.book_customer_order(customer_id, [], created_by=created_by, record_activity=False)

    def add_items_to_booking(self, booking_id: int, lines: Iterable[LineInput]) -> List:
        """Appends to an existing booking, merging repeated items into their line."""
        lines = list(lines)
        with unit_of_work(self.session):
            if self.order_repo.get_booking(booking_id) is None:
                raise BookingNotFound(booking_id)
            priced = self._price_lines(lines)
            touched = [
                self.order_repo.add_or_merge_line(booking_id, line.item_id, line.qty, line.unit_price)
                for line in priced
            ]
        logger.info(f"➕ {len(touched)} lines added/merged into booking {booking_id}")
        return touched

    def update_line(self, line_id: int, qty: int, amount: Optional[float] = None):
        self.rules.check_quantity(qty)
        with unit_of_work(self.session):
            return self.order_repo.update_booking_line(line_id, qty, amount)

    def remove_line(self, line_id: int) -> bool:
        with unit_of_work(self.session):
            return self.order_repo.delete_booking_line(line_id)

    def _price_lines(self, lines: List[LineInput]) -> List[LineInput]:
        priced = []
        for line in lines:
            unit_price = line.unit_price
            if unit_price is None:
                item = self.item_repo.get_item(line.item_id)
                if item is None:
                    raise ItemNotFound(line.item_id)
                unit_price = item.price
            self.rules.check_line(line.qty, unit_price)
            priced.append(LineInput(item_id=line.item_id, qty=line.qty, unit_price=unit_price))
        return priced
