from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from eventhub import __version__

router = APIRouter()

AVAILABLE_ENDPOINTS = [
    "/health",
    "/events",
    "/signin",
    "/signup",
    "/signout",
    "/auth/social",
    "/bookings",
    "/user/bookings",
    "/cart",
    "/admin/stats",
    "/admin/events",
    "/admin/users",
]

FEATURES = [
    "User Authentication (Email/Password + Social)",
    "Event Management",
    "Booking System",
    "Shopping Cart",
    "Admin Dashboard",
    "User Analytics",
    "Session Management",
]

# Registered last: anything no other route claims ends up here
@router.api_route("/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"], include_in_schema=False)
def describe_api(path: str, request: Request):
    if request.method == "OPTIONS":
        return PlainTextResponse("ok")
    return {
        "message": "EventHub API - Indian Event Management Platform",
        "path": request.url.path,
        "method": request.method,
        "version": __version__,
        "features": FEATURES,
        "availableEndpoints": AVAILABLE_ENDPOINTS,
        "currency": "INR (₹)",
        "region": "India",
    }
