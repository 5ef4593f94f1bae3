import logging
from datetime import datetime, timezone

from eventhub.core.config import Settings
from eventhub.core.security import get_password_hash
from eventhub.schemas.base import utcnow
from eventhub.schemas.event import Event
from eventhub.schemas.user import User
from eventhub.store.base import Store

logger = logging.getLogger(__name__)

TEST_USER_EMAIL = "test@example.com"
TEST_USER_PASSWORD = "password123"

_IMG = "https://images.unsplash.com/photo-{}?ixlib=rb-4.0.3&auto=format&fit=crop&w=1000&q=80"

SAMPLE_EVENTS = [
    {
        "id": "1",
        "title": "React Developer Conference 2027",
        "description": "Join us for the biggest React conference of the year! Learn about the latest features, best practices, and connect with fellow developers.",
        "date_time": datetime(2027, 3, 15, 10, 0, tzinfo=timezone.utc),
        "location": "Bangalore International Exhibition Centre, Bangalore",
        "type": "Conference",
        "total_tickets": 500,
        "available_tickets": 350,
        "price": 2500,
        "image_url": _IMG.format("1540575467063-178a50c2df87"),
    },
    {
        "id": "2",
        "title": "Classical Music Concert",
        "description": "An enchanting evening of classical music featuring renowned Indian and international musicians.",
        "date_time": datetime(2027, 2, 28, 20, 0, tzinfo=timezone.utc),
        "location": "NCPA Theatre, Mumbai",
        "type": "Concert",
        "total_tickets": 150,
        "available_tickets": 75,
        "price": 1200,
        "image_url": _IMG.format("1493225457124-a3eb161ffa5f"),
    },
    {
        "id": "3",
        "title": "Digital Marketing Workshop",
        "description": "Master the art of digital marketing with hands-on workshops covering SEO, social media, and content strategy.",
        "date_time": datetime(2027, 3, 5, 9, 0, tzinfo=timezone.utc),
        "location": "WeWork, Cyber City, Gurgaon",
        "type": "Workshop",
        "total_tickets": 50,
        "available_tickets": 25,
        "price": 1500,
        "image_url": _IMG.format("1552664730-d307ca884978"),
    },
    {
        "id": "4",
        "title": "IPL Cricket Match",
        "description": "Experience the thrill of live cricket with this exciting IPL match between top teams!",
        "date_time": datetime(2027, 4, 12, 19, 0, tzinfo=timezone.utc),
        "location": "M. Chinnaswamy Stadium, Bangalore",
        "type": "Sports",
        "total_tickets": 20000,
        "available_tickets": 15000,
        "price": 800,
        "image_url": _IMG.format("1546519638-68e109498ffc"),
    },
    {
        "id": "5",
        "title": "Contemporary Art Exhibition",
        "description": "Discover stunning contemporary art from emerging Indian artists at this exclusive gallery opening.",
        "date_time": datetime(2027, 3, 20, 18, 0, tzinfo=timezone.utc),
        "location": "National Gallery of Modern Art, Delhi",
        "type": "Arts & Culture",
        "total_tickets": 200,
        "available_tickets": 180,
        "price": 300,
        "image_url": _IMG.format("1578321272176-b7bbc0679853"),
    },
]


def seed_demo_data(store: Store, settings: Settings) -> None:
    """Idempotently insert the demo accounts and sample events."""
    admin_email = (settings.seed_admin_email or "admin@example.com").lower()
    admin_pwd = settings.seed_admin_password or "admin123"
    now = utcnow()

    if store.get_user_by_email(TEST_USER_EMAIL) is None:
        store.add_user(User(
            id="test-user-123",
            email=TEST_USER_EMAIL,
            password_hash=get_password_hash(TEST_USER_PASSWORD),
            first_name="Test",
            last_name="User",
            created_at=now,
        ))

    if store.get_user_by_email(admin_email) is None:
        store.add_user(User(
            id="admin-user-123",
            email=admin_email,
            password_hash=get_password_hash(admin_pwd),
            first_name="Admin",
            last_name="User",
            is_admin=True,
            created_at=now,
        ))

    created = 0
    for data in SAMPLE_EVENTS:
        if store.get_event(data["id"]) is None:
            store.add_event(Event(**data, created_at=now, updated_at=now))
            created += 1
    logger.info("[seed] demo data ready (%d new events)", created)
