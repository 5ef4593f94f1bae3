import uuid

import pytest
from fastapi.testclient import TestClient

from eventhub.core.config import Settings
from eventhub.main import create_app
from eventhub.schemas.event import Event
from eventhub.store.memory import MemoryStore

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin123"


def make_settings(**overrides) -> Settings:
    values = {
        "SECRET_KEY": "test-secret",
        "ENV": "test",
        "DATABASE_URL": None,
        "SEED_DEMO_DATA": True,
        "ADMIN_EMAILS": "boss@example.com",
        "LOG_LEVEL": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_event(event_id: str = "evt-1", tickets: int = 10, price: float = 100.0, available: int | None = None) -> Event:
    return Event(
        id=event_id,
        title="Test Event",
        date_time="2099-01-01T10:00:00Z",
        location="Test Hall",
        total_tickets=tickets,
        available_tickets=tickets if available is None else available,
        price=price,
    )


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def client(settings, store):
    app = create_app(settings, store)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def signup(client):
    """Register a fresh user; returns (user json, token)."""
    def _signup(email: str | None = None, password: str = "secret1", **extra):
        email = email or f"user-{uuid.uuid4().hex[:8]}@example.com"
        r = client.post("/signup", json={"email": email, "password": password, **extra})
        assert r.status_code == 200, r.text
        data = r.json()
        return data["user"], data["token"]
    return _signup


@pytest.fixture
def admin_token(client) -> str:
    r = client.post("/signin", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert r.status_code == 200, r.text
    return r.json()["token"]
