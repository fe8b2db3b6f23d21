from abc import ABC, abstractmethod
from typing import List, Optional

from fieldsales.domain.models import Item

class IItemRepository(ABC):
    @abstractmethod
    def list_items(self, substring: str = "") -> List[Item]:
        pass

    @abstractmethod
    def get_item(self, item_id: int) -> Optional[Item]:
        pass

    @abstractmethod
    def add_item(self, name: str, price: float, type: Optional[str] = None,
                 image: Optional[str] = None) -> Item:
        pass
