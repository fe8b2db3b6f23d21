from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from fieldsales.application.booking_service import BookingService, LineInput
from fieldsales.application.daily_rollover import DailyRollover
from fieldsales.core import clock
from fieldsales.core.config import settings
from fieldsales.domain.schemas import (
    ActivityLogOut, BookingCreate, BookingLinesAdd, BookingResult, LineOut, LineUpdate,
    OrderLineDetail, OrderSummary, RecentActivityOut,
)
from fieldsales.infrastructure.database import get_db
from fieldsales.infrastructure.repositories.activity_repository import SqlActivityRepository
from fieldsales.infrastructure.repositories.order_repository import SqlOrderRepository

router = APIRouter(tags=["orders"])


def _line_inputs(lines) -> List[LineInput]:
    return [LineInput(item_id=l.item_id, qty=l.order_qty, unit_price=l.unit_price) for l in lines]


# Bookings
@router.post("/bookings", response_model=BookingResult, status_code=201)
def book_order(body: BookingCreate, db: Session = Depends(get_db)):
    return BookingService(db).book_customer_order(
        body.customer_id,
        _line_inputs(body.lines),
        created_by=body.created_by_id,
        order_date=body.order_date,
    )


@router.post("/bookings/{booking_id}/lines", response_model=List[LineOut])
def add_booking_lines(booking_id: int, body: BookingLinesAdd, db: Session = Depends(get_db)):
    return BookingService(db).add_items_to_booking(booking_id, _line_inputs(body.lines))


@router.put("/lines/{line_id}", response_model=LineOut)
def update_line(line_id: int, body: LineUpdate, db: Session = Depends(get_db)):
    line = BookingService(db).update_line(line_id, body.order_qty, body.amount)
    if line is None:
        raise HTTPException(status_code=404, detail="Line not found")
    return line


@router.delete("/lines/{line_id}", status_code=204)
def delete_line(line_id: int, db: Session = Depends(get_db)):
    BookingService(db).remove_line(line_id)


# Orders (read side)
@router.get("/orders", response_model=List[OrderSummary])
def list_orders(db: Session = Depends(get_db)):
    return SqlOrderRepository(db).list_orders()


@router.get("/orders/{booking_id}", response_model=List[OrderLineDetail])
def get_order_details(booking_id: int, db: Session = Depends(get_db)):
    return SqlOrderRepository(db).get_order_details(booking_id)


# Activity
@router.get("/activity/recent", response_model=List[RecentActivityOut])
def recent_activity(limit: Optional[int] = Query(None, ge=1), db: Session = Depends(get_db)):
    if limit is None:
        limit = settings.RECENT_ACTIVITY_LIMIT
    return SqlOrderRepository(db).list_recent_activity(limit)


@router.get("/activity/today", response_model=List[ActivityLogOut])
def activity_today(day: Optional[date] = None, db: Session = Depends(get_db)):
    return SqlActivityRepository(db).list_for_day(day or clock.today())


@router.post("/activity/reset")
def reset_daily(day: Optional[date] = None, db: Session = Depends(get_db)):
    """Every customer back to Unvisited; the day's log rows follow so both views agree."""
    opened = DailyRollover(db).run(day)
    return {"status": "reset", "rows_opened": opened}
