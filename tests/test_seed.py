from datetime import date

from sqlalchemy import text

from fieldsales.domain.enums import VisitStatus
from fieldsales.infrastructure.repositories.activity_repository import SqlActivityRepository
from fieldsales.infrastructure.repositories.customer_repository import SqlCustomerRepository
from fieldsales.infrastructure.seed import SEED_CUSTOMERS, normalize_visit_flags, seed_database


def _insert_legacy_rows(session):
    session.execute(text("INSERT INTO customer (name, visited) VALUES ('Old Shop', '1'), ('Older Shop', 'false')"))
    session.execute(text(
        "INSERT INTO activity_log (customer_id, customer_name, date, status) "
        "VALUES (1, 'Old Shop', '2025-11-06', '0')"
    ))
    session.commit()


def test_normalize_visit_flags_rewrites_legacy_values(session):
    _insert_legacy_rows(session)

    assert normalize_visit_flags(session) == 3
    session.commit()

    visited = {c.name: c.visited for c in SqlCustomerRepository(session).list_customers()}
    assert visited == {"Old Shop": VisitStatus.VISITED, "Older Shop": VisitStatus.UNVISITED}
    rows = SqlActivityRepository(session).list_for_day(date(2025, 11, 6))
    assert [r.status for r in rows] == [VisitStatus.UNVISITED]


def test_normalize_visit_flags_leaves_labels_alone(session, seeded):
    assert normalize_visit_flags(session) == 0


def test_seed_database_only_on_empty_store(session):
    assert seed_database(session) is True
    session.commit()
    assert len(SqlCustomerRepository(session).list_customers()) == len(SEED_CUSTOMERS)
    assert seed_database(session) is False
