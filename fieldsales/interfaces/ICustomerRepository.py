from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from fieldsales.domain.enums import VisitStatus
from fieldsales.domain.models import Customer

class ICustomerRepository(ABC):
    @abstractmethod
    def list_customers(self) -> List[Customer]:
        pass

    @abstractmethod
    def search_customers(self, substring: str) -> List[Customer]:
        pass

    @abstractmethod
    def get_customer(self, customer_id: int) -> Optional[Customer]:
        pass

    @abstractmethod
    def set_visited(self, customer_id: int, visited: VisitStatus) -> None:
        pass

    @abstractmethod
    def add_customer(self, name: str, phone: Optional[str] = None,
                     last_seen: Optional[datetime] = None,
                     visited: VisitStatus = VisitStatus.UNVISITED) -> Customer:
        pass

    @abstractmethod
    def update_location(self, customer_id: int, latitude: float, longitude: float,
                        status_label: Optional[str]) -> None:
        pass

    @abstractmethod
    def mark_seen(self, customer_id: int, when: Optional[datetime] = None) -> None:
        pass
