from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from fieldsales.application.daily_rollover import DailyRollover
from fieldsales.domain.schemas import (
    CustomerCreate, CustomerOut, LocationUpdate, OrderSummary, ReceiptCreate, ReceiptOut,
    VisitedUpdate,
)
from fieldsales.infrastructure.database import get_db, unit_of_work
from fieldsales.infrastructure.repositories.customer_repository import SqlCustomerRepository
from fieldsales.infrastructure.repositories.order_repository import SqlOrderRepository
from fieldsales.infrastructure.repositories.receipt_repository import SqlReceiptRepository

router = APIRouter(tags=["customers"])


@router.get("/customers", response_model=List[CustomerOut])
def list_customers(q: str = "", db: Session = Depends(get_db)):
    return SqlCustomerRepository(db).search_customers(q)


@router.post("/customers", response_model=CustomerOut, status_code=201)
def add_customer(body: CustomerCreate, db: Session = Depends(get_db)):
    repo = SqlCustomerRepository(db)
    with unit_of_work(db):
        customer = repo.add_customer(body.name, body.phone, body.last_seen, body.visited)
    return customer


@router.put("/customers/{customer_id}/visited", status_code=204)
def set_visited(customer_id: int, body: VisitedUpdate, db: Session = Depends(get_db)):
    DailyRollover(db).toggle_visited(customer_id, body.visited)


@router.put("/customers/{customer_id}/location", response_model=CustomerOut)
def update_location(customer_id: int, body: LocationUpdate, db: Session = Depends(get_db)):
    repo = SqlCustomerRepository(db)
    with unit_of_work(db):
        repo.update_location(customer_id, body.latitude, body.longitude, body.location_status)
    customer = repo.get_customer(customer_id)
    if customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


@router.get("/customers/{customer_id}/orders", response_model=List[OrderSummary])
def list_customer_orders(customer_id: int, db: Session = Depends(get_db)):
    return SqlOrderRepository(db).list_orders_by_customer(customer_id)


@router.post("/customers/{customer_id}/receipts", status_code=201)
def add_receipt(customer_id: int, body: ReceiptCreate, db: Session = Depends(get_db)):
    repo = SqlReceiptRepository(db)
    with unit_of_work(db):
        receipt = repo.add_receipt(customer_id, body.cash_bank_id, body.amount, body.note, body.attachment)
    return {"id": receipt.id, "message": "Payment recorded"}


@router.get("/receipts", response_model=List[ReceiptOut])
def list_receipts(db: Session = Depends(get_db)):
    return SqlReceiptRepository(db).list_receipts()
