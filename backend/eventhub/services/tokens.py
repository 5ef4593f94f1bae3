"""Session-bound access tokens.

A token is an HS256-signed JWT carrying ``sub`` (user id), ``sid`` (session
id), ``iat`` and ``exp``. It is only honoured while the session record it
points at exists and is active, so signing out revokes it before expiry.
"""
import logging
import uuid
from datetime import timedelta
from typing import Optional

import jwt

from eventhub.core.config import Settings
from eventhub.core.errors import UnauthorizedError
from eventhub.core.security import create_access_token, decode_access_token
from eventhub.schemas.auth import Identity
from eventhub.schemas.base import utcnow
from eventhub.schemas.user import SessionRecord
from eventhub.store.base import Store

logger = logging.getLogger(__name__)


class TokenIssuer:

    def __init__(self, store: Store, settings: Settings):
        self._store = store
        self._settings = settings

    def issue(self, user_id: str, expires_delta: Optional[timedelta] = None) -> str:
        now = utcnow()
        session = SessionRecord(session_id=str(uuid.uuid4()), user_id=user_id, created_at=now, last_activity=now)
        self._store.add_session(session)
        return create_access_token(user_id, session.session_id, self._settings, expires_delta)

    def verify(self, token: str) -> Identity:
        """Return the identity behind a token or raise UnauthorizedError.

        Malformed, forged and expired tokens are reported the same way.
        """
        try:
            payload = decode_access_token(token, self._settings)
        except jwt.PyJWTError as exc:
            logger.debug("[auth] token rejected: %s", exc)
            raise UnauthorizedError("Invalid token") from None
        user_id = payload.get("sub")
        session_id = payload.get("sid")
        if not user_id or not session_id:
            raise UnauthorizedError("Invalid token")
        session = self._store.touch_session(str(session_id), utcnow())
        if session is None or not session.is_active or session.user_id != user_id:
            raise UnauthorizedError("Invalid token")
        return Identity(user_id=str(user_id), session_id=str(session_id))

    def revoke(self, identity: Identity) -> bool:
        return self._store.deactivate_session(identity.session_id)
