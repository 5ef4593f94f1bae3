from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from conftest import make_event, make_settings
from eventhub.core.errors import ConflictError, InsufficientTicketsError, NotFoundError
from eventhub.db.session import make_engine, normalize_database_url
from eventhub.main import create_app
from eventhub.schemas.base import utcnow
from eventhub.schemas.booking import Booking
from eventhub.schemas.cart import CartItem
from eventhub.schemas.user import Activity, SessionRecord, User
from eventhub.services.ledger import BookingLedger
from eventhub.store.sql import SqlStore


@pytest.fixture
def sql_store(tmp_path):
    store = SqlStore(make_engine(f"sqlite:///{tmp_path / 'eventhub.db'}"), create_tables=True)
    store.open()
    yield store
    store.close()


def _booking(booking_id, quantity, event_id="evt-1", user_id="user-1"):
    return Booking(id=booking_id, user_id=user_id, event_id=event_id, quantity=quantity, total_price=quantity * 100.0)


def test_commit_booking_decrements_atomically(sql_store):
    sql_store.add_event(make_event("evt-1", tickets=10))
    event = sql_store.commit_booking(_booking("b1", 4))
    assert event.available_tickets == 6

    with pytest.raises(InsufficientTicketsError) as exc:
        sql_store.commit_booking(_booking("b2", 7))
    assert exc.value.remaining == 6
    assert sql_store.get_event("evt-1").available_tickets == 6
    assert [b.id for b in sql_store.list_bookings()] == ["b1"]

    with pytest.raises(NotFoundError):
        sql_store.commit_booking(_booking("b3", 1, event_id="ghost"))


def test_round_trip_keeps_utc_and_prices(sql_store):
    sql_store.add_event(make_event("evt-1", tickets=3, price=99.5))
    event = sql_store.get_event("evt-1")
    assert event.price == 99.5
    assert event.date_time.tzinfo is not None
    assert event.to_json()["dateTime"] == "2099-01-01T10:00:00Z"


def test_users_unique_email_and_login_counter(sql_store):
    sql_store.add_user(User(id="u1", email="a@x.com"))
    with pytest.raises(ConflictError):
        sql_store.add_user(User(id="u2", email="a@x.com"))
    user = sql_store.record_login("u1", utcnow())
    assert user.login_count == 1
    assert user.last_login is not None
    assert sql_store.get_user_by_email("a@x.com").id == "u1"
    with pytest.raises(NotFoundError):
        sql_store.record_login("missing", utcnow())


def test_sessions_touch_and_deactivate(sql_store):
    start = utcnow() - timedelta(minutes=5)
    sql_store.add_session(SessionRecord(session_id="s1", user_id="u1", created_at=start, last_activity=start))
    touched = sql_store.touch_session("s1", utcnow())
    assert touched.last_activity > start
    assert sql_store.deactivate_session("s1") is True
    assert sql_store.deactivate_session("s1") is False
    assert sql_store.touch_session("s1", utcnow()).is_active is False
    assert sql_store.touch_session("nope", utcnow()) is None


def test_activity_keeps_insertion_order_and_details(sql_store):
    sql_store.record_activity(Activity(user_id="u1", action="signup", details={"method": "email_password"}))
    sql_store.record_activity(Activity(user_id="unknown", action="failed_login"))
    sql_store.record_activity(Activity(user_id="u1", action="login"))
    assert [a.action for a in sql_store.list_activity()] == ["signup", "failed_login", "login"]
    assert [a.action for a in sql_store.list_activity("u1")] == ["signup", "login"]
    assert sql_store.list_activity("u1")[0].details == {"method": "email_password"}


def test_cart_upsert_keeps_one_line_per_event(sql_store):
    sql_store.add_event(make_event("evt-1"))
    first = sql_store.upsert_cart_item(CartItem(id="c1", user_id="u1", event_id="evt-1", quantity=1, price_per_ticket=100.0))
    again = sql_store.upsert_cart_item(CartItem(id="c2", user_id="u1", event_id="evt-1", quantity=4, price_per_ticket=90.0))
    assert first.id == again.id == "c1"
    assert [(i.id, i.quantity, i.price_per_ticket) for i in sql_store.list_cart_items("u1")] == [("c1", 4, 90.0)]
    assert sql_store.remove_cart_item("u2", "c1") is False
    assert sql_store.remove_cart_item("u1", "c1") is True
    assert sql_store.list_cart_items("u1") == []


def test_full_api_flow_on_sql_backend(tmp_path):
    settings = make_settings(DATABASE_URL=f"sqlite:///{tmp_path / 'api.db'}")
    with TestClient(create_app(settings)) as c:
        r = c.post("/signup", json={"email": "a@x.com", "password": "secret1"})
        assert r.status_code == 200, r.text
        headers = {"Authorization": f"Bearer {r.json()['token']}"}

        assert c.post("/signup", json={"email": "a@x.com", "password": "other2"}).status_code == 409

        r = c.post("/bookings", json={"eventId": "3", "quantity": 20}, headers=headers)
        assert r.status_code == 200, r.text
        r = c.post("/bookings", json={"eventId": "3", "quantity": 6}, headers=headers)
        assert r.status_code == 400
        assert "Only 5 tickets left" in r.json()["error"]
        assert c.get("/events/3").json()["event"]["availableTickets"] == 5

        assert len(c.get("/user/bookings", headers=headers).json()["bookings"]) == 1

        admin = c.post("/signin", json={"email": "admin@example.com", "password": "admin123"}).json()["token"]
        stats = c.get("/admin/stats", headers={"Authorization": f"Bearer {admin}"}).json()
        assert stats["totalBookings"] == 1
        assert stats["totalRevenue"] == 20 * 1500

        assert c.post("/signout", headers=headers).status_code == 200
        assert c.get("/user/bookings", headers=headers).status_code == 401


def test_seeding_is_idempotent(tmp_path):
    settings = make_settings(DATABASE_URL=f"sqlite:///{tmp_path / 'seed.db'}")
    for _ in range(2):
        with TestClient(create_app(settings)) as c:
            assert len(c.get("/events").json()["events"]) == 5


def test_postgres_urls_use_psycopg_driver():
    assert normalize_database_url("postgres://u:p@db/eventhub").startswith(("postgresql+psycopg://", "postgres://"))
    assert normalize_database_url("sqlite:///x.db") == "sqlite:///x.db"


def test_out_of_range_values_are_rejected_not_500(tmp_path):
    settings = make_settings(DATABASE_URL=f"sqlite:///{tmp_path / 'limits.db'}")
    with TestClient(create_app(settings)) as c:
        headers = {"Authorization": f"Bearer {c.post('/signup', json={'email': 'a@x.com', 'password': 'secret1'}).json()['token']}"}

        r = c.post("/bookings", json={"eventId": "3", "quantity": 10**20}, headers=headers)
        assert r.status_code == 400
        assert r.json() == {"error": "Not enough tickets available. Only 25 tickets left."}

        r = c.post("/bookings", json={"eventId": "3", "quantity": 1, "totalAmount": 1e15}, headers=headers)
        assert r.status_code == 400
        assert r.json() == {"error": "Total amount is too large"}
        assert c.get("/events/3").json()["event"]["availableTickets"] == 25

        r = c.post("/cart", json={"eventId": "3", "quantity": 10**20}, headers=headers)
        assert r.status_code == 400
        assert c.get("/cart", headers=headers).json()["cartItems"] == []


def test_large_booking_total_is_stored(sql_store):
    ledger = BookingLedger(sql_store)
    sql_store.add_event(make_event("gala", tickets=60, price=2_000_000.0))
    booking = ledger.create_booking("user-1", "gala", 50)
    assert booking["totalPrice"] == 100_000_000.0
    assert sql_store.list_bookings()[0].total_price == 100_000_000.0
