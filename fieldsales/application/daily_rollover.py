import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from fieldsales.domain.enums import VisitStatus
from fieldsales.infrastructure.database import unit_of_work
from fieldsales.infrastructure.repositories.activity_repository import SqlActivityRepository
from fieldsales.infrastructure.repositories.customer_repository import SqlCustomerRepository

logger = logging.getLogger(__name__)


class DailyRollover:
    """Visit-tracking transactions that touch the customer and the day log together."""

    def __init__(self, session: Session):
        self.session = session
        self.activity_repo = SqlActivityRepository(session)
        self.customer_repo = SqlCustomerRepository(session)

    def open_day(self, today: Optional[date] = None) -> int:
        """Safe on every start: only missing (customer, today) rows are created."""
        with unit_of_work(self.session):
            return self.activity_repo.ensure_today_rows(today)

    def run(self, today: Optional[date] = None) -> int:
        with unit_of_work(self.session):
            return self.activity_repo.reset_daily(today)

    def toggle_visited(self, customer_id: int, visited, today: Optional[date] = None) -> None:
        """Manual toggle from the customer list; keeps today's row in step."""
        status = VisitStatus.coerce(visited)
        with unit_of_work(self.session):
            self.customer_repo.set_visited(customer_id, status)
            self.activity_repo.set_today_status(customer_id, status, today)
        logger.info(f"👣 Customer {customer_id} marked {status.value}")
