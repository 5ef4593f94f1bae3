from datetime import datetime, timedelta, timezone
from typing import Any, Optional
import jwt
from passlib.context import CryptContext

from eventhub.core.config import Settings

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    # Social accounts carry no password
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def create_access_token(subject: str, session_id: str, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    issued_at = datetime.now(tz=timezone.utc)
    expire = issued_at + (expires_delta if expires_delta is not None else timedelta(hours=settings.token_expire_hours))
    to_encode: dict[str, Any] = {"sub": str(subject), "sid": session_id, "iat": issued_at, "exp": expire}
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str, settings: Settings) -> dict[str, Any]:
    """Decode and verify an access token (signature, expiry, required claims).

    Raises jwt.PyJWTError if invalid and returns the payload as a dict.
    """
    return jwt.decode(
        token,
        settings.secret_key,
        algorithms=[settings.algorithm],
        options={"require": ["sub", "sid", "exp", "iat"]},
    )
