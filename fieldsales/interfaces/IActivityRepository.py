from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from fieldsales.domain.enums import VisitStatus
from fieldsales.domain.models import ActivityLog

class IActivityRepository(ABC):
    @abstractmethod
    def ensure_today_rows(self, today: Optional[date] = None) -> int:
        pass

    @abstractmethod
    def mark_visited(self, customer_id: int, today: Optional[date] = None) -> None:
        pass

    @abstractmethod
    def set_today_status(self, customer_id: int, status: VisitStatus,
                         today: Optional[date] = None) -> None:
        pass

    @abstractmethod
    def list_for_day(self, day: date) -> List[ActivityLog]:
        pass

    @abstractmethod
    def reset_daily(self, today: Optional[date] = None) -> int:
        pass
