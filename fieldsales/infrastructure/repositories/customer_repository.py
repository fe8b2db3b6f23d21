import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from fieldsales.core import clock
from fieldsales.domain.enums import VisitStatus
from fieldsales.domain.models import Customer
from fieldsales.interfaces.ICustomerRepository import ICustomerRepository

logger = logging.getLogger(__name__)


class SqlCustomerRepository(ICustomerRepository):

    def __init__(self, session: Session):
        self.session = session

    def list_customers(self) -> List[Customer]:
        """All customers, most recently created first."""
        return self.session.query(Customer).order_by(desc(Customer.entity_id)).all()

    def search_customers(self, substring: str) -> List[Customer]:
        if not substring or not substring.strip():
            return self.list_customers()
        return (
            self.session.query(Customer)
            .filter(Customer.name.ilike(f"%{substring.strip()}%"))
            .order_by(desc(Customer.entity_id))
            .all()
        )

    def get_customer(self, customer_id: int) -> Optional[Customer]:
        return self.session.get(Customer, customer_id)

    def set_visited(self, customer_id: int, visited) -> None:
        customer = self.session.get(Customer, customer_id)
        if customer is None:
            return
        customer.visited = VisitStatus.coerce(visited)
        self.session.flush()

    def mark_seen(self, customer_id: int, when: Optional[datetime] = None) -> None:
        """Visited + last_seen stamp, the customer side of a booked order."""
        customer = self.session.get(Customer, customer_id)
        if customer is None:
            return
        customer.visited = VisitStatus.VISITED
        customer.last_seen = when or clock.now()
        self.session.flush()

    def add_customer(self, name: str, phone: Optional[str] = None,
                     last_seen: Optional[datetime] = None,
                     visited=VisitStatus.UNVISITED) -> Customer:
        customer = Customer(
            name=name,
            phone=phone,
            last_seen=last_seen,
            visited=VisitStatus.coerce(visited),
        )
        self.session.add(customer)
        self.session.flush()
        logger.info(f"👤 Customer added: {customer.entity_id} ({name})")
        return customer

    def update_location(self, customer_id: int, latitude: float, longitude: float,
                        status_label: Optional[str]) -> None:
        customer = self.session.get(Customer, customer_id)
        if customer is None:
            return
        customer.latitude = latitude
        customer.longitude = longitude
        customer.location_status = status_label
        customer.last_seen = clock.now()
        self.session.flush()
        logger.info(f"📍 Location updated for customer {customer_id}: {latitude}, {longitude}")
