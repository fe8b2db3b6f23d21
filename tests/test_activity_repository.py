from datetime import date

from fieldsales.application.daily_rollover import DailyRollover
from fieldsales.domain.enums import VisitStatus
from fieldsales.domain.models import ActivityLog, Customer
from fieldsales.infrastructure.repositories.activity_repository import SqlActivityRepository

DAY = date(2025, 11, 6)


def test_ensure_today_rows_is_idempotent(session, seeded):
    repo = SqlActivityRepository(session)
    assert repo.ensure_today_rows(DAY) == 5
    assert repo.ensure_today_rows(DAY) == 0

    rows = repo.list_for_day(DAY)
    assert len(rows) == 5
    assert len({r.customer_id for r in rows}) == 5
    assert all(r.status == VisitStatus.UNVISITED for r in rows)


def test_ensure_today_rows_picks_up_new_customers(session, seeded):
    repo = SqlActivityRepository(session)
    repo.ensure_today_rows(DAY)
    session.add(Customer(name="Late Joiner"))
    session.flush()
    assert repo.ensure_today_rows(DAY) == 1


def test_mark_visited_updates_row_and_customer(session, seeded):
    repo = SqlActivityRepository(session)
    customer = seeded["customers"][3]
    repo.ensure_today_rows(DAY)

    repo.mark_visited(customer.entity_id, DAY)

    assert session.get(Customer, customer.entity_id).visited == VisitStatus.VISITED
    statuses = {r.customer_id: r.status for r in repo.list_for_day(DAY)}
    assert statuses[customer.entity_id] == VisitStatus.VISITED
    assert sum(s == VisitStatus.VISITED for s in statuses.values()) == 1


def test_mark_visited_creates_missing_row(session, seeded):
    repo = SqlActivityRepository(session)
    customer = seeded["customers"][0]
    repo.mark_visited(customer.entity_id, DAY)
    rows = repo.list_for_day(DAY)
    assert [(r.customer_id, r.status, r.customer_name) for r in rows] == [
        (customer.entity_id, VisitStatus.VISITED, "John Doe")
    ]


def test_mark_visited_unknown_customer_is_noop(session, seeded):
    repo = SqlActivityRepository(session)
    repo.mark_visited(9999, DAY)
    assert repo.list_for_day(DAY) == []


def test_reset_daily(session, seeded):
    repo = SqlActivityRepository(session)
    for customer in seeded["customers"][:3]:
        repo.mark_visited(customer.entity_id, DAY)

    next_day = date(2025, 11, 7)
    assert repo.reset_daily(next_day) == 5

    assert all(c.visited == VisitStatus.UNVISITED for c in session.query(Customer))
    assert len(repo.list_for_day(next_day)) == 5
    # Yesterday's log is history and stays as it was
    assert sum(r.status == VisitStatus.VISITED for r in repo.list_for_day(DAY)) == 3


def test_rollover_toggle_keeps_day_row_in_step(session, seeded):
    rollover = DailyRollover(session)
    cid = seeded["customers"][1].entity_id
    rollover.open_day(DAY)

    rollover.toggle_visited(cid, 1, DAY)
    row = session.query(ActivityLog).filter_by(customer_id=cid, date=DAY).one()
    assert row.status == VisitStatus.VISITED

    rollover.toggle_visited(cid, "Unvisited", DAY)
    session.refresh(row)
    assert row.status == VisitStatus.UNVISITED
    assert session.get(Customer, cid).visited == VisitStatus.UNVISITED


def test_rollover_run_twice_same_day(session, seeded):
    rollover = DailyRollover(session)
    rollover.run(DAY)
    rollover.run(DAY)
    assert session.query(ActivityLog).filter_by(date=DAY).count() == 5


def test_reset_daily_same_day_reopens_visited_rows(session, seeded):
    repo = SqlActivityRepository(session)
    repo.ensure_today_rows(DAY)
    visited = seeded["customers"][0]
    repo.mark_visited(visited.entity_id, DAY)

    assert repo.reset_daily(DAY) == 0

    assert visited.visited == VisitStatus.UNVISITED
    assert {r.status for r in repo.list_for_day(DAY)} == {VisitStatus.UNVISITED}
