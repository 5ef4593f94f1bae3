from typing import Any, Optional
from pydantic import Field

from eventhub.schemas.base import CamelModel, UtcDatetime, utcnow


class User(CamelModel):
    id: str
    email: str
    password_hash: str = ""
    first_name: str = ""
    last_name: str = ""
    is_admin: bool = False
    created_at: UtcDatetime = Field(default_factory=utcnow)
    last_login: Optional[UtcDatetime] = None
    login_count: int = 0
    is_email_verified: bool = False
    auth_provider: str = "email"


class SessionRecord(CamelModel):
    session_id: str
    user_id: str
    created_at: UtcDatetime = Field(default_factory=utcnow)
    last_activity: UtcDatetime = Field(default_factory=utcnow)
    is_active: bool = True


class Activity(CamelModel):
    # "unknown" for failed logins against an unregistered email
    user_id: str
    action: str
    timestamp: UtcDatetime = Field(default_factory=utcnow)
    details: dict[str, Any] = Field(default_factory=dict)
