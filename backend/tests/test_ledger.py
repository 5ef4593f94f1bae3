import threading

import pytest

from conftest import make_event
from eventhub.core.errors import InsufficientTicketsError, NotFoundError, ValidationError
from eventhub.schemas.event import EventCreate
from eventhub.services.cart import CartService
from eventhub.services.ledger import BookingLedger
from eventhub.store.memory import MemoryStore


@pytest.fixture
def ledger(store: MemoryStore) -> BookingLedger:
    store.add_event(make_event("evt-1", tickets=10, price=250.0))
    return BookingLedger(store)


def test_book_then_reject_overbooking_leaves_state_unchanged(ledger, store):
    booking = ledger.create_booking("user-1", "evt-1", 4)
    assert booking["quantity"] == 4
    assert booking["status"] == "Confirmed"
    assert store.get_event("evt-1").available_tickets == 6

    with pytest.raises(InsufficientTicketsError) as exc:
        ledger.create_booking("user-1", "evt-1", 7)
    assert exc.value.remaining == 6
    assert "Only 6 tickets left" in exc.value.message

    assert store.get_event("evt-1").available_tickets == 6
    assert len(store.list_bookings()) == 1


def test_available_equals_total_minus_booked(ledger, store):
    quantities = [1, 3, 2, 4]
    for q in quantities:
        ledger.create_booking("user-1", "evt-1", q)
    event = store.get_event("evt-1")
    assert event.available_tickets == event.total_tickets - sum(quantities) == 0

    with pytest.raises(InsufficientTicketsError):
        ledger.create_booking("user-1", "evt-1", 1)


def test_total_price_defaults_to_price_times_quantity(ledger):
    assert ledger.create_booking("user-1", "evt-1", 3)["totalPrice"] == 750.0
    assert ledger.create_booking("user-1", "evt-1", 2, total_amount=420.0)["totalPrice"] == 420.0


def test_booking_response_embeds_event_snapshot(ledger):
    booking = ledger.create_booking("user-1", "evt-1", 1)
    assert booking["event"] == {
        "title": "Test Event",
        "dateTime": "2099-01-01T10:00:00Z",
        "location": "Test Hall",
    }


@pytest.mark.parametrize("quantity", [None, 0, -2])
def test_invalid_quantity_rejected(ledger, store, quantity):
    with pytest.raises(ValidationError):
        ledger.create_booking("user-1", "evt-1", quantity)
    assert store.get_event("evt-1").available_tickets == 10


def test_unknown_event_not_found(ledger):
    with pytest.raises(NotFoundError):
        ledger.create_booking("user-1", "missing", 1)


def test_user_bookings_are_filtered_and_joined(ledger):
    ledger.create_booking("user-1", "evt-1", 2)
    ledger.create_booking("user-2", "evt-1", 1)
    mine = ledger.list_user_bookings("user-1")
    assert len(mine) == 1
    assert mine[0]["userId"] == "user-1"
    assert mine[0]["event"]["title"] == "Test Event"
    assert "imageUrl" in mine[0]["event"]


def test_concurrent_bookings_never_oversell():
    store = MemoryStore()
    store.add_event(make_event("hot", tickets=10))
    ledger = BookingLedger(store)
    outcomes: list[str] = []
    barrier = threading.Barrier(8)

    def attempt():
        barrier.wait()
        try:
            ledger.create_booking("racer", "hot", 3)
            outcomes.append("ok")
        except InsufficientTicketsError:
            outcomes.append("rejected")

    threads = [threading.Thread(target=attempt) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count("ok") == 3
    assert outcomes.count("rejected") == 5
    assert store.get_event("hot").available_tickets == 1
    assert sum(b.quantity for b in store.list_bookings()) == 9


def test_concurrent_cart_adds_keep_one_line_per_event():
    store = MemoryStore()
    store.add_event(make_event("hot", tickets=10))
    cart = CartService(store)
    barrier = threading.Barrier(8)
    ids: list[str] = []

    def add(quantity):
        barrier.wait()
        ids.append(cart.add_item("racer", "hot", quantity).id)

    threads = [threading.Thread(target=add, args=(q,)) for q in range(1, 9)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    items = store.list_cart_items("racer")
    assert len(items) == 1
    assert set(ids) == {items[0].id}


def test_create_event_defaults_and_category_mapping(store):
    ledger = BookingLedger(store)
    event = ledger.create_event(EventCreate(
        title="Jazz Night",
        date="2099-05-01T19:30:00",
        location="Blue Note",
        price=499,
        category="Concert",
    ))
    assert event.total_tickets == event.available_tickets == 100
    assert event.type == "Concert"
    assert event.status == "active"
    assert event.date_time.tzinfo is not None
    assert store.get_event(event.id) == event


def test_create_event_requires_core_fields(store):
    ledger = BookingLedger(store)
    with pytest.raises(ValidationError) as exc:
        ledger.create_event(EventCreate(title="No date", location="Somewhere", price=10))
    assert exc.value.message == "Title, date, location, and price are required"


def test_quantity_beyond_stock_rejected_before_store(ledger, store):
    with pytest.raises(InsufficientTicketsError) as exc:
        ledger.create_booking("user-1", "evt-1", 10**20)
    assert exc.value.remaining == 10
    assert store.list_bookings() == []


def test_total_amount_limit(ledger, store):
    with pytest.raises(ValidationError) as exc:
        ledger.create_booking("user-1", "evt-1", 1, total_amount=1e15)
    assert exc.value.message == "Total amount is too large"
    assert store.get_event("evt-1").available_tickets == 10


@pytest.mark.parametrize("overrides,message", [
    ({"capacity": 2**31}, "Capacity is too large"),
    ({"price": 1e13}, "Price is too large"),
])
def test_create_event_limits(store, overrides, message):
    ledger = BookingLedger(store)
    payload = EventCreate(**{"title": "Big", "date": "2099-05-01T19:30:00", "location": "Arena", "price": 10, **overrides})
    with pytest.raises(ValidationError) as exc:
        ledger.create_event(payload)
    assert exc.value.message == message
    assert store.list_events() == []
