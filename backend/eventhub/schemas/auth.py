from typing import NamedTuple, Optional

from eventhub.schemas.base import CamelModel, UtcDatetime


class Identity(NamedTuple):
    user_id: str
    session_id: str


class UserOut(CamelModel):
    id: str
    email: str
    first_name: str
    last_name: str
    is_admin: bool


class AdminUserOut(UserOut):
    created_at: UtcDatetime
    last_login: Optional[UtcDatetime] = None
    login_count: int
    is_email_verified: bool
    auth_provider: str


class AuthResponse(CamelModel):
    user: UserOut
    token: str
    message: str


class SignUpBody(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class SignInBody(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class SocialSignInBody(CamelModel):
    provider: Optional[str] = None
