"""Admin dashboard aggregates.

Every figure is recomputed from the store on each call; nothing is cached.
"""
from collections import Counter
from datetime import date
from typing import Any, Iterable, Optional

from eventhub.schemas.auth import AdminUserOut
from eventhub.schemas.base import utcnow
from eventhub.schemas.user import Activity
from eventhub.store.base import Store

RECENT_PER_USER = 5
RECENT_LIMIT = 10


def recent_activity(entries: Iterable[Activity], per_user: int = RECENT_PER_USER, limit: int = RECENT_LIMIT) -> list[Activity]:
    """Last ``per_user`` entries of every user, newest first, capped at ``limit``."""
    by_user: dict[str, list[Activity]] = {}
    for entry in entries:
        by_user.setdefault(entry.user_id, []).append(entry)
    merged = [a for history in by_user.values() for a in history[-per_user:]]
    merged.sort(key=lambda a: a.timestamp, reverse=True)
    return merged[:limit]


def signup_stats(entries: Iterable[Activity]) -> dict[str, Any]:
    daily: Counter[str] = Counter()
    monthly: Counter[str] = Counter()
    for entry in entries:
        if entry.action != "signup":
            continue
        daily[entry.timestamp.date().isoformat()] += 1
        monthly[entry.timestamp.strftime("%Y-%m")] += 1
    return {"total": sum(daily.values()), "daily": dict(daily), "monthly": dict(monthly)}


class AdminAnalytics:

    def __init__(self, store: Store):
        self._store = store

    def compute_stats(self, today: Optional[date] = None) -> dict[str, Any]:
        today = today or utcnow().date()
        events = self._store.list_events()
        bookings = self._store.list_bookings()
        activity = self._store.list_activity()
        signups = signup_stats(activity)
        return {
            "totalEvents": len(events),
            "totalBookings": len(bookings),
            "totalRevenue": sum(b.total_price for b in bookings),
            "activeEvents": sum(1 for e in events if e.available_tickets > 0),
            "totalUsers": len(self._store.list_users()),
            "activeUsers": sum(1 for s in self._store.list_sessions() if s.is_active),
            "todaySignups": signups["daily"].get(today.isoformat(), 0),
            "totalSignups": signups["total"],
            "recentActivity": [a.to_json() for a in recent_activity(activity)],
        }

    def admin_events(self) -> list[dict[str, Any]]:
        booked: Counter[str] = Counter()
        for b in self._store.list_bookings():
            booked[b.event_id] += b.quantity
        events = []
        for e in self._store.list_events():
            data = e.to_json()
            data.update({
                "bookingsCount": booked[e.id],
                "status": "active" if e.available_tickets > 0 else "sold-out",
                "category": e.type,
                "capacity": e.total_tickets,
                "date": data["dateTime"],
            })
            events.append(data)
        return events

    def admin_users(self) -> dict[str, Any]:
        users = self._store.list_users()
        active_sessions = sum(1 for s in self._store.list_sessions() if s.is_active)
        return {
            "users": [AdminUserOut.model_validate(u.model_dump()).to_json() for u in users],
            "stats": {
                "totalUsers": len(users),
                "adminUsers": sum(1 for u in users if u.is_admin),
                "verifiedUsers": sum(1 for u in users if u.is_email_verified),
                "socialUsers": sum(1 for u in users if u.auth_provider != "email"),
                "activeSessions": active_sessions,
            },
            "signupStats": signup_stats(self._store.list_activity()),
        }
