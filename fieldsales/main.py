import logging
import time
from pathlib import Path

from fastapi import Depends, FastAPI
from fastapi.requests import Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from fieldsales.core.config import settings

# Models must be imported before create_all so their tables are registered
from fieldsales.domain import models  # noqa: F401
from fieldsales.domain.exceptions import (
    AmountMismatch, BookingNotFound, CustomerNotFound, ItemNotFound, LedgerError, RuleViolation,
)
from fieldsales.application.daily_rollover import DailyRollover
from fieldsales.infrastructure.database import Base, SessionLocal, engine, get_db, unit_of_work
from fieldsales.infrastructure.repositories.order_repository import SqlOrderRepository
from fieldsales.infrastructure.seed import normalize_visit_flags, seed_database
from fieldsales.interfaces import catalog_api, customers_api, orders_api

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)
templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


# ---------------------------------------------------------
# DATABASE BOOTSTRAP (With Retry Logic)
# ---------------------------------------------------------
def init_database(bind=engine, session_factory=SessionLocal) -> bool:
    for attempt in range(settings.DB_CONNECT_RETRIES):
        try:
            logger.info(f"🔄 Attempting DB connection ({attempt + 1}/{settings.DB_CONNECT_RETRIES})...")
            Base.metadata.create_all(bind=bind)
            logger.info("✅ DB Connected and Tables Created.")
            break
        except OperationalError as e:
            logger.warning(f"⚠️ DB not ready yet ({e}). Waiting {settings.DB_CONNECT_WAIT_SECONDS}s...")
            time.sleep(settings.DB_CONNECT_WAIT_SECONDS)
    else:
        logger.error("❌ Could not connect to DB after retries.")
        return False

    session = session_factory()
    try:
        with unit_of_work(session):
            normalize_visit_flags(session)
        if settings.SEED_ON_STARTUP:
            with unit_of_work(session):
                seed_database(session)
        # Opening today's rows is idempotent, so it runs on every start
        DailyRollover(session).open_day()
    finally:
        session.close()
    return True


db_ready = init_database()


# ---------------------------------------------------------
# ERROR MAPPING
# ---------------------------------------------------------
NOT_FOUND_ERRORS = (CustomerNotFound, BookingNotFound, ItemNotFound)
INVALID_INPUT_ERRORS = (RuleViolation, AmountMismatch)


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    if isinstance(exc, NOT_FOUND_ERRORS):
        status_code = 404
    elif isinstance(exc, INVALID_INPUT_ERRORS):
        status_code = 422
    else:
        status_code = 400
    logger.warning(f"⚠️ {request.method} {request.url.path} rejected: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.error(f"❌ Constraint violation on {request.method} {request.url.path}: {exc.orig}")
    return JSONResponse(status_code=409, content={"detail": "Constraint violation"})


# Include Routers
app.include_router(customers_api.router)
app.include_router(catalog_api.router)
app.include_router(orders_api.router)


@app.get("/")
def health_check():
    status = "active" if db_ready else "degraded"
    return {"status": status, "system": "Field Sales Ledger"}


@app.get("/admin/orders", response_class=HTMLResponse)
def read_orders(request: Request, db: Session = Depends(get_db)):
    repo = SqlOrderRepository(db)
    orders = repo.list_orders()[:20]
    activity = repo.list_recent_activity(settings.RECENT_ACTIVITY_LIMIT)
    return templates.TemplateResponse(
        request, "dashboard.html", {"orders": orders, "activity": activity}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
