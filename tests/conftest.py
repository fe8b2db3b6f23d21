import os

# Point the composition root at a throwaway in-memory store before anything imports settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_ON_STARTUP"] = "false"

import pytest

from fieldsales.domain import models  # noqa: F401  (registers tables)
from fieldsales.domain.models import Customer, Item
from fieldsales.infrastructure.database import Base, build_engine, build_session_factory


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    db = build_session_factory(engine)()
    yield db
    db.close()


@pytest.fixture
def seeded(session):
    """5 customers and 4 items, ids in insertion order."""
    customers = [Customer(name=name, phone=phone) for name, phone in [
        ("John Doe", "123456789"),
        ("Jane Smith", "987654321"),
        ("Alice Johnson", "555666777"),
        ("Bob Williams", "111222333"),
        ("Carol Brown", "444555666"),
    ]]
    items = [Item(name=name, price=price, type="General") for name, price in [
        ("Item A", 100.0),
        ("Item B", 200.0),
        ("Item C", 50.0),
        ("Item D", 25.5),
    ]]
    session.add_all(customers + items)
    session.commit()
    return {"customers": customers, "items": items}
