from fastapi import APIRouter, Depends

from eventhub.api.deps import get_analytics, get_ledger, require_admin
from eventhub.core.errors import DomainError, NotFoundError
from eventhub.schemas.event import EventCreate
from eventhub.services.analytics import AdminAnalytics
from eventhub.services.ledger import BookingLedger

# One guard for every admin endpoint: 401 without a valid token, 403 for non-admins
router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/stats", response_model=dict)
def service_stats(analytics: AdminAnalytics = Depends(get_analytics)):
    """Dashboard totals plus the ten most recent account events.

    Returns:
        totalEvents, totalBookings, totalRevenue, activeEvents (tickets left),
        totalUsers, activeUsers (active sessions), todaySignups, totalSignups,
        recentActivity (last 5 per user, newest first, 10 max)
    """
    return analytics.compute_stats()


@router.get("/events", response_model=dict)
def list_events(analytics: AdminAnalytics = Depends(get_analytics)):
    return {"events": analytics.admin_events()}


@router.post("/events", response_model=dict)
def create_event(payload: EventCreate, ledger: BookingLedger = Depends(get_ledger)):
    event = ledger.create_event(payload)
    return {"success": True, "event": event.to_json()}


@router.get("/users", response_model=dict)
def list_users(analytics: AdminAnalytics = Depends(get_analytics)):
    return analytics.admin_users()


ADMIN_ENDPOINTS = {"stats", "events", "users"}


# Registered after the endpoints above and still behind the router guard;
# OPTIONS is left to the application-wide fallback.
@router.api_route("/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"], include_in_schema=False)
def unmatched_admin_route(path: str):
    if path.strip("/") in ADMIN_ENDPOINTS:
        raise DomainError("Method not allowed", status_code=405)
    raise NotFoundError("Admin endpoint not found")
