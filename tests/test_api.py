import pytest
from fastapi.testclient import TestClient

from fieldsales.core import clock
from fieldsales.infrastructure.database import Base, build_engine, build_session_factory, get_db
from fieldsales.infrastructure.seed import SEED_CUSTOMERS, SEED_ITEMS, seed_database
from fieldsales.main import app


@pytest.fixture
def client(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'ledger.db'}")
    Base.metadata.create_all(bind=engine)
    factory = build_session_factory(engine)
    with factory() as db:
        seed_database(db)
        db.commit()

    def override_get_db():
        db = factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    engine.dispose()


def _book(client, customer_id=1, lines=None):
    lines = lines or [
        {"item_id": 1, "order_qty": 3, "unit_price": 100.0},
        {"item_id": 2, "order_qty": 1, "unit_price": 200.0},
    ]
    return client.post("/bookings", json={"customer_id": customer_id, "created_by_id": 1, "lines": lines})


def test_health_check(client):
    assert client.get("/").json()["status"] == "active"


def test_list_and_search_customers(client):
    customers = client.get("/customers").json()
    assert len(customers) == len(SEED_CUSTOMERS)
    assert customers[0]["name"] == SEED_CUSTOMERS[-1][0]
    assert {c["visited"] for c in customers} == {"Visited", "Unvisited"}

    assert [c["name"] for c in client.get("/customers", params={"q": "smith"}).json()] == ["Jane Smith"]
    assert client.get("/customers", params={"q": "xyz-no-match"}).json() == []


def test_add_customer_accepts_legacy_flag(client):
    response = client.post("/customers", json={"name": "Corner Store", "phone": "0300", "visited": 1})
    assert response.status_code == 201
    assert response.json()["visited"] == "Visited"
    assert client.get("/customers").json()[0]["name"] == "Corner Store"


def test_add_customer_requires_name(client):
    assert client.post("/customers", json={"phone": "0300"}).status_code == 422


def test_update_location(client):
    response = client.put("/customers/2/location", json={"latitude": 24.86, "longitude": 67.0})
    assert response.status_code == 200
    body = response.json()
    assert (body["latitude"], body["longitude"], body["location_status"]) == (24.86, 67.0, "Updated")
    assert client.put("/customers/999/location", json={"latitude": 1, "longitude": 1}).status_code == 404


def test_visited_toggle_updates_today_log(client):
    assert client.put("/customers/2/visited", json={"visited": "Visited"}).status_code == 204
    rows = {r["customer_id"]: r["status"] for r in client.get("/activity/today").json()}
    assert rows[2] == "Visited"
    # Unknown id: silent no-op
    assert client.put("/customers/999/visited", json={"visited": 1}).status_code == 204


def test_items_listing_and_add(client):
    assert len(client.get("/items").json()) == len(SEED_ITEMS)
    assert [i["name"] for i in client.get("/items", params={"q": "JUICE"}).json()] == ["Orange Juice 1L"]

    response = client.post("/items", json={"name": "Green Tea", "price": 300.0, "type": "Grocery"})
    assert response.status_code == 201
    assert client.get("/items").json()[0]["name"] == "Green Tea"


def test_booking_flow(client):
    response = _book(client)
    assert response.status_code == 201
    booking = response.json()
    assert booking["total_qty"] == 4
    assert booking["total_amount"] == 500

    orders = client.get("/orders").json()
    assert len(orders) == 1
    assert (orders[0]["item_count"], orders[0]["total_amount"]) == (2, 500)
    assert orders[0]["customer_name"] == "John Doe"

    details = client.get(f"/orders/{booking['booking_id']}").json()
    assert [(d["item_id"], d["order_qty"], d["amount"]) for d in details] == [(1, 3, 300.0), (2, 1, 200.0)]

    assert client.get("/customers/1/orders").json()[0]["booking_id"] == booking["booking_id"]
    assert client.get("/customers/2/orders").json() == []

    feed = client.get("/activity/recent").json()
    assert feed[0]["booking_id"] == booking["booking_id"]
    assert feed[0]["item_count"] == 4

    today = {r["customer_id"]: r["status"] for r in client.get("/activity/today").json()}
    assert today[1] == "Visited"


def test_adding_lines_merges_repeated_item(client):
    booking_id = _book(client).json()["booking_id"]
    response = client.post(f"/bookings/{booking_id}/lines", json={"lines": [{"item_id": 1, "order_qty": 2}]})
    assert response.status_code == 200
    assert (response.json()[0]["order_qty"], response.json()[0]["amount"]) == (5, 500.0)

    details = client.get(f"/orders/{booking_id}").json()
    assert len([d for d in details if d["item_id"] == 1]) == 1


def test_line_update_and_delete(client):
    booking_id = _book(client).json()["booking_id"]
    lines = client.get(f"/orders/{booking_id}").json()

    first = lines[0]["line_id"]
    assert client.put(f"/lines/{first}", json={"order_qty": 2, "amount": 999}).status_code == 422
    assert client.put(f"/lines/{first}", json={"order_qty": 2}).json()["amount"] == 200.0
    assert client.put("/lines/9999", json={"order_qty": 2}).status_code == 404

    for line in lines:
        assert client.delete(f"/lines/{line['line_id']}").status_code == 204

    orders = client.get("/orders").json()
    assert (orders[0]["booking_id"], orders[0]["item_count"], orders[0]["total_amount"]) == (booking_id, 0, 0)


def test_booking_errors(client):
    assert _book(client, customer_id=999).status_code == 404
    assert _book(client, lines=[{"item_id": 1, "order_qty": 0}]).status_code == 422
    assert _book(client, lines=[{"item_id": 999, "order_qty": 1}]).status_code == 404
    assert _book(client, lines=[{"item_id": 999, "order_qty": 1, "unit_price": 5}]).status_code == 409
    assert client.post("/bookings/999/lines", json={"lines": [{"item_id": 1, "order_qty": 1}]}).status_code == 404
    assert client.get("/orders").json() == []


def test_reset_daily(client):
    _book(client)
    response = client.post("/activity/reset")
    assert response.status_code == 200
    # Only the booked customer had a row for today
    assert response.json()["rows_opened"] == len(SEED_CUSTOMERS) - 1

    assert {c["visited"] for c in client.get("/customers").json()} == {"Unvisited"}
    rows = client.get("/activity/today", params={"day": clock.today().isoformat()}).json()
    assert len(rows) == len(SEED_CUSTOMERS)


def test_receipts(client):
    response = client.post("/customers/3/receipts", json={"cash_bank_id": "CASH-01", "amount": 750.0,
                                                           "note": "Nov dues"})
    assert response.status_code == 201
    assert client.post("/customers/3/receipts", json={"amount": 10}).status_code == 422

    receipts = client.get("/receipts").json()
    assert [(r["customer_name"], r["amount"]) for r in receipts] == [("Alice Johnson", 750.0)]


def test_dashboard(client):
    order_no = _book(client).json()["order_no"]
    response = client.get("/admin/orders")
    assert response.status_code == 200
    assert order_no in response.text


def test_recent_activity_limit_must_be_positive(client):
    _book(client)
    _book(client, customer_id=2)
    assert client.get("/activity/recent", params={"limit": 0}).status_code == 422
    assert client.get("/activity/recent", params={"limit": -1}).status_code == 422
    assert len(client.get("/activity/recent", params={"limit": 1}).json()) == 1


def test_mid_day_reset_keeps_customers_and_day_log_in_step(client):
    _book(client)
    client.post("/activity/reset")

    customers = {c["entity_id"]: c["visited"] for c in client.get("/customers").json()}
    today = {r["customer_id"]: r["status"] for r in client.get("/activity/today").json()}
    assert customers[1] == today[1] == "Unvisited"
