import logging
from datetime import datetime

from sqlalchemy import text
from sqlalchemy.orm import Session

from fieldsales.domain.enums import VisitStatus
from fieldsales.domain.models import ActivityLog, Customer, Item

logger = logging.getLogger(__name__)

# (name, phone, last_seen, visited) - legacy 0/1 flags, coerced on insert
SEED_CUSTOMERS = [
    ("John Doe", "123456789", "2025-11-06 10:00", 1),
    ("Jane Smith", "987654321", "2025-11-05 18:30", 0),
    ("Alice Johnson", "555666777", "2025-11-06 09:15", 1),
    ("Bob Williams", "111222333", "2025-11-04 14:20", 0),
    ("Carol Brown", "444555666", "2025-11-06 08:45", 1),
    ("David Miller", "777888999", "2025-11-03 19:10", 0),
    ("Eva Davis", "222333444", "2025-11-06 11:30", 1),
    ("Frank Wilson", "333444555", "2025-11-05 16:50", 0),
    ("Grace Lee", "666777888", "2025-11-06 07:25", 1),
    ("Henry Taylor", "999000111", "2025-11-04 12:40", 0),
]

# (name, price, type)
SEED_ITEMS = [
    ("Mineral Water 1.5L", 100.0, "Beverages"),
    ("Orange Juice 1L", 200.0, "Beverages"),
    ("Potato Chips 150g", 80.0, "Snacks"),
    ("Chocolate Biscuits", 120.0, "Snacks"),
    ("Dish Soap 500ml", 250.0, "Household"),
    ("Tea 250g", 450.0, "Grocery"),
]


def seed_database(session: Session) -> bool:
    """Inserts the demo customers and catalog on an empty store. Returns True if it seeded."""
    if session.query(Customer).first() is not None:
        return False

    session.add_all(
        Customer(
            name=name,
            phone=phone,
            last_seen=datetime.strptime(last_seen, "%Y-%m-%d %H:%M"),
            visited=VisitStatus.coerce(visited),
        )
        for name, phone, last_seen, visited in SEED_CUSTOMERS
    )
    if session.query(Item).first() is None:
        session.add_all(Item(name=name, price=price, type=type_) for name, price, type_ in SEED_ITEMS)

    session.flush()
    logger.info(f"🌱 Seeded {len(SEED_CUSTOMERS)} customers and {len(SEED_ITEMS)} items")
    return True


# Columns that older builds filled with 0/1 or free-form case variants
VISIT_STATUS_COLUMNS = [
    (Customer.__tablename__, "visited"),
    (ActivityLog.__tablename__, "status"),
]


def normalize_visit_flags(session: Session) -> int:
    """
    Rewrites stored legacy visit flags to their "Visited"/"Unvisited" labels.
    Raw SQL, since the ORM enum type cannot load the old values.
    Returns the number of rows rewritten.
    """
    labels = {status.value for status in VisitStatus}
    rewritten = 0
    for table, column in VISIT_STATUS_COLUMNS:
        stored = session.execute(text(f"SELECT DISTINCT {column} FROM {table}")).scalars().all()
        for raw in stored:
            if raw in labels:
                continue
            try:
                label = VisitStatus.coerce(raw).value
            except ValueError:
                logger.warning(f"⚠️ Unrecognized {table}.{column} value {raw!r} left as is")
                continue
            result = session.execute(
                text(f"UPDATE {table} SET {column} = :label WHERE {column} = :raw"),
                {"label": label, "raw": raw},
            )
            rewritten += result.rowcount
    if rewritten:
        logger.info(f"🧹 Normalized {rewritten} legacy visit flags")
    return rewritten
