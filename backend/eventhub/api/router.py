from fastapi import APIRouter

from eventhub.api.routes import health, auth, events, bookings, cart, admin

api_router = APIRouter()
api_router.include_router(health.router, tags=["health"])  # GET /health
api_router.include_router(auth.router, tags=["auth"])  # POST /signup, /signin, /auth/social, /signout
api_router.include_router(events.router, tags=["events"])  # GET /events, /events/{id}
api_router.include_router(bookings.router, tags=["bookings"])  # POST /bookings, GET /user/bookings
api_router.include_router(cart.router, prefix="/cart", tags=["cart"])  # GET/POST /cart, DELETE /cart/{id}
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])  # admin endpoints
