from typing import Optional
from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from eventhub.core.config import Settings
from eventhub.core.errors import ForbiddenError, UnauthorizedError
from eventhub.schemas.auth import Identity
from eventhub.schemas.user import User
from eventhub.services.accounts import AccountService
from eventhub.services.analytics import AdminAnalytics
from eventhub.services.cart import CartService
from eventhub.services.ledger import BookingLedger
from eventhub.services.tokens import TokenIssuer
from eventhub.store.base import Store

# auto_error=False: a missing header is reported as our own 401 body, not FastAPI's
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/signin", auto_error=False)

def get_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_store(request: Request) -> Store:
    return request.app.state.store

def get_issuer(store: Store = Depends(get_store), settings: Settings = Depends(get_settings)) -> TokenIssuer:
    return TokenIssuer(store, settings)

def get_accounts(store: Store = Depends(get_store), issuer: TokenIssuer = Depends(get_issuer), settings: Settings = Depends(get_settings)) -> AccountService:
    return AccountService(store, issuer, settings)

def get_ledger(store: Store = Depends(get_store)) -> BookingLedger:
    return BookingLedger(store)

def get_cart(store: Store = Depends(get_store)) -> CartService:
    return CartService(store)

def get_analytics(store: Store = Depends(get_store)) -> AdminAnalytics:
    return AdminAnalytics(store)

def get_current_identity(token: Optional[str] = Depends(oauth2_scheme), issuer: TokenIssuer = Depends(get_issuer)) -> Identity:
    """Resolve the Bearer token into (user_id, session_id)."""
    if not token:
        raise UnauthorizedError("Authorization required")
    return issuer.verify(token)

def require_admin(identity: Identity = Depends(get_current_identity), store: Store = Depends(get_store)) -> User:
    user = store.get_user(identity.user_id)
    if user is None or not user.is_admin:
        raise ForbiddenError("Admin access required")
    return user
