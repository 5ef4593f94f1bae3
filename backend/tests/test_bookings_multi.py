import pytest

from conftest import make_event


@pytest.fixture
def token(signup):
    _user, token = signup()
    return token


def seed_event(store, tickets: int = 5, price: float = 100.0, event_id: str = "evt-1"):
    store.add_event(make_event(event_id, tickets=tickets, price=price))
    return event_id


def book(client, token, event_id, quantity, **extra):
    return client.post(
        "/bookings",
        json={"eventId": event_id, "quantity": quantity, **extra},
        headers={"Authorization": f"Bearer {token}"},
    )


def test_multi_purchase_success(client, store, token):
    event_id = seed_event(store, tickets=6)
    r = book(client, token, event_id, 3)
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["success"] is True
    assert data["booking"]["quantity"] == 3
    assert data["booking"]["totalPrice"] == 300.0
    assert data["booking"]["event"]["location"] == "Test Hall"

    # tickets should have decremented to 3 now
    r2 = client.get(f"/events/{event_id}")
    assert r2.status_code == 200
    assert r2.json()["event"]["availableTickets"] == 3


def test_multi_purchase_not_enough_tickets(client, store, token):
    event_id = seed_event(store, tickets=2)
    r = book(client, token, event_id, 5)
    assert r.status_code == 400
    assert r.json() == {"error": "Not enough tickets available. Only 2 tickets left."}


def test_multi_purchase_partial_then_exhaust(client, store, token):
    event_id = seed_event(store, tickets=4)

    r1 = book(client, token, event_id, 3)
    assert r1.status_code == 200

    # Now only 1 ticket left, try to buy 2 -> fail
    r2 = book(client, token, event_id, 2)
    assert r2.status_code == 400

    # Buy the last 1 successfully
    r3 = book(client, token, event_id, 1)
    assert r3.status_code == 200

    # Tickets now 0
    r4 = client.get(f"/events/{event_id}")
    assert r4.json()["event"]["availableTickets"] == 0


def test_ten_four_seven_scenario(client, store, token):
    event_id = seed_event(store, tickets=10)
    assert book(client, token, event_id, 4).status_code == 200
    r = book(client, token, event_id, 7)
    assert r.status_code == 400
    assert "Only 6 tickets left" in r.json()["error"]
    assert store.get_event(event_id).available_tickets == 6

    bookings = client.get("/user/bookings", headers={"Authorization": f"Bearer {token}"}).json()["bookings"]
    assert [b["quantity"] for b in bookings] == [4]


def test_total_amount_overrides_computed_price(client, store, token):
    event_id = seed_event(store, tickets=10, price=100.0)
    r = book(client, token, event_id, 2, totalAmount=150.5)
    assert r.json()["booking"]["totalPrice"] == 150.5


def test_booking_validation_and_not_found(client, store, token):
    seed_event(store)
    r = book(client, token, "evt-1", 0)
    assert r.status_code == 400
    assert r.json()["error"] == "Event ID and valid quantity are required"

    r = book(client, token, "nope", 1)
    assert r.status_code == 404
    assert r.json() == {"error": "Event not found"}

    r = book(client, token, "evt-1", "lots")
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid request body"


def test_booking_requires_token(client, store):
    event_id = seed_event(store)
    r = client.post("/bookings", json={"eventId": event_id, "quantity": 1})
    assert r.status_code == 401
    assert store.get_event(event_id).available_tickets == 5


def test_user_bookings_only_lists_own(client, store, signup):
    event_id = seed_event(store, tickets=10)
    _u1, t1 = signup()
    _u2, t2 = signup()
    book(client, t1, event_id, 1)
    book(client, t2, event_id, 2)
    book(client, t2, event_id, 3)

    r = client.get("/user/bookings", headers={"Authorization": f"Bearer {t2}"})
    assert r.status_code == 200
    assert sorted(b["quantity"] for b in r.json()["bookings"]) == [2, 3]
    assert all(b["event"]["title"] == "Test Event" for b in r.json()["bookings"])


def test_public_event_listing(client):
    r = client.get("/events")
    assert r.status_code == 200
    events = r.json()["events"]
    assert {e["id"] for e in events} == {"1", "2", "3", "4", "5"}
    assert client.get("/events/3").json()["event"]["title"] == "Digital Marketing Workshop"
    r = client.get("/events/404")
    assert r.status_code == 404
    assert r.json() == {"error": "Event not found"}
