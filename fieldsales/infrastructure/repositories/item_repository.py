import logging
from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from fieldsales.domain.models import Item
from fieldsales.interfaces.IItemRepository import IItemRepository

logger = logging.getLogger(__name__)


class SqlItemRepository(IItemRepository):

    def __init__(self, session: Session):
        self.session = session

    def list_items(self, substring: str = "") -> List[Item]:
        """Catalog items, newest first, optionally filtered by name."""
        query = self.session.query(Item)
        if substring and substring.strip():
            query = query.filter(Item.name.ilike(f"%{substring.strip()}%"))
        return query.order_by(desc(Item.id)).all()

    def get_item(self, item_id: int) -> Optional[Item]:
        return self.session.get(Item, item_id)

    def add_item(self, name: str, price: float, type: Optional[str] = None,
                 image: Optional[str] = None) -> Item:
        item = Item(name=name, price=price, type=type, image=image)
        self.session.add(item)
        self.session.flush()
        logger.info(f"📦 Item added: {item.id} ({name} @ {price})")
        return item
