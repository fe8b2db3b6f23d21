from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from fieldsales.domain.models import OrderBooking, OrderBookingLine, RecentActivity
from fieldsales.domain.schemas import OrderSummary, OrderLineDetail

class IOrderRepository(ABC):
    @abstractmethod
    def create_booking(self, order_date: datetime, customer_id: int, order_no: str,
                       created_by: Optional[int], created_date: datetime) -> int:
        pass

    @abstractmethod
    def get_booking(self, booking_id: int) -> Optional[OrderBooking]:
        pass

    @abstractmethod
    def add_booking_line(self, booking_id: int, item_id: int, qty: int, unit_price: float,
                         amount: Optional[float] = None) -> OrderBookingLine:
        pass

    @abstractmethod
    def get_line_by_booking_and_item(self, booking_id: int, item_id: int) -> Optional[OrderBookingLine]:
        pass

    @abstractmethod
    def add_or_merge_line(self, booking_id: int, item_id: int, qty: int,
                          unit_price: float) -> OrderBookingLine:
        pass

    @abstractmethod
    def update_booking_line(self, line_id: int, qty: int,
                            amount: Optional[float] = None) -> Optional[OrderBookingLine]:
        pass

    @abstractmethod
    def delete_booking_line(self, line_id: int) -> bool:
        pass

    @abstractmethod
    def list_orders(self) -> List[OrderSummary]:
        pass

    @abstractmethod
    def list_orders_by_customer(self, customer_id: int) -> List[OrderSummary]:
        pass

    @abstractmethod
    def get_order_details(self, booking_id: int) -> List[OrderLineDetail]:
        pass

    @abstractmethod
    def record_recent_activity(self, booking_id: int, customer_name: str, item_count: int,
                               total_amount: float) -> RecentActivity:
        pass

    @abstractmethod
    def list_recent_activity(self, limit: int = 10) -> List[RecentActivity]:
        pass
