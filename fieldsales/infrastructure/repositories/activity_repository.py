import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from fieldsales.core import clock
from fieldsales.domain.enums import VisitStatus
from fieldsales.domain.models import ActivityLog, Customer
from fieldsales.interfaces.IActivityRepository import IActivityRepository

logger = logging.getLogger(__name__)


class SqlActivityRepository(IActivityRepository):
    """Daily (customer, date) visit log. At most one row per customer per day."""

    def __init__(self, session: Session):
        self.session = session

    def _row_for(self, customer_id: int, day: date) -> Optional[ActivityLog]:
        return (
            self.session.query(ActivityLog)
            .filter(ActivityLog.customer_id == customer_id, ActivityLog.date == day)
            .first()
        )

    def ensure_today_rows(self, today: Optional[date] = None) -> int:
        day = today or clock.today()
        logged = {
            cid for (cid,) in
            self.session.query(ActivityLog.customer_id).filter(ActivityLog.date == day)
        }
        missing = [
            ActivityLog(customer_id=c.entity_id, customer_name=c.name, date=day,
                        status=VisitStatus.UNVISITED)
            for c in self.session.query(Customer).order_by(Customer.entity_id)
            if c.entity_id not in logged
        ]
        self.session.add_all(missing)
        self.session.flush()
        if missing:
            logger.info(f"📅 Activity log: {len(missing)} rows opened for {day}")
        return len(missing)

    def set_today_status(self, customer_id: int, status, today: Optional[date] = None) -> None:
        day = today or clock.today()
        customer = self.session.get(Customer, customer_id)
        if customer is None:
            return

        status = VisitStatus.coerce(status)
        row = self._row_for(customer_id, day)
        if row is None:
            row = ActivityLog(customer_id=customer_id, customer_name=customer.name, date=day)
            self.session.add(row)
        row.status = status
        self.session.flush()

    def mark_visited(self, customer_id: int, today: Optional[date] = None) -> None:
        """Today's row and the customer's running flag both become Visited."""
        customer = self.session.get(Customer, customer_id)
        if customer is None:
            return
        customer.visited = VisitStatus.VISITED
        self.set_today_status(customer_id, VisitStatus.VISITED, today)

    def list_for_day(self, day: date) -> List[ActivityLog]:
        return (
            self.session.query(ActivityLog)
            .filter(ActivityLog.date == day)
            .order_by(ActivityLog.customer_id)
            .all()
        )

    def reset_daily(self, today: Optional[date] = None) -> int:
        """
        New-day rollover. Nothing schedules this; callers trigger it.
        Rows already open for the day go back to Unvisited so the log agrees
        with the customer flags; earlier days are history and stay as they were.
        """
        day = today or clock.today()
        for customer in self.session.query(Customer):
            customer.visited = VisitStatus.UNVISITED
        for row in self.session.query(ActivityLog).filter(ActivityLog.date == day):
            row.status = VisitStatus.UNVISITED
        self.session.flush()
        opened = self.ensure_today_rows(day)
        logger.info(f"🔄 Daily reset done, {opened} new activity rows")
        return opened
