from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fieldsales.domain.rules import LineRules
from fieldsales.domain.schemas import ItemCreate, ItemOut
from fieldsales.infrastructure.database import get_db, unit_of_work
from fieldsales.infrastructure.repositories.item_repository import SqlItemRepository

router = APIRouter(tags=["catalog"])


@router.get("/items", response_model=List[ItemOut])
def list_items(q: str = "", db: Session = Depends(get_db)):
    return SqlItemRepository(db).list_items(q)


@router.post("/items", response_model=ItemOut, status_code=201)
def add_item(body: ItemCreate, db: Session = Depends(get_db)):
    LineRules.from_settings().check_price(body.price)
    repo = SqlItemRepository(db)
    with unit_of_work(db):
        item = repo.add_item(body.name, body.price, body.type, body.image)
    return item
