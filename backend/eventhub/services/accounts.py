import logging
import uuid
from typing import Any, NamedTuple, Optional

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from eventhub.core.config import Settings
from eventhub.core.errors import UnauthorizedError, ValidationError, ConflictError
from eventhub.core.security import get_password_hash, verify_password
from eventhub.schemas.auth import Identity
from eventhub.schemas.base import utcnow
from eventhub.schemas.user import Activity, User
from eventhub.services.tokens import TokenIssuer
from eventhub.store.base import Store

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

_email_adapter = TypeAdapter(EmailStr)


class SocialProfile(NamedTuple):
    id: str
    email: str
    first_name: str
    last_name: str


# OAuth is simulated: each provider always yields the same account
SOCIAL_PROFILES: dict[str, SocialProfile] = {
    "google": SocialProfile("google-user-123", "user@gmail.com", "Arjun", "Sharma"),
    "facebook": SocialProfile("facebook-user-123", "user@facebook.com", "Priya", "Patel"),
    "github": SocialProfile("github-user-123", "user@github.com", "Rahul", "Kumar"),
}


class AuthResult(NamedTuple):
    user: User
    token: str
    message: str


def normalize_email(email: str) -> str:
    return email.lower().strip()


class AccountService:

    def __init__(self, store: Store, issuer: TokenIssuer, settings: Settings):
        self._store = store
        self._issuer = issuer
        self._settings = settings

    def sign_up(self, email: Optional[str], password: Optional[str], first_name: Optional[str] = None, last_name: Optional[str] = None) -> AuthResult:
        if not email or not password:
            raise ValidationError("Email and password are required")
        email = normalize_email(email)
        try:
            _email_adapter.validate_python(email)
        except PydanticValidationError:
            raise ValidationError("Invalid email format") from None
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
        if self._store.get_user_by_email(email):
            raise ConflictError("User already exists with this email")

        now = utcnow()
        user = User(
            id=str(uuid.uuid4()),
            email=email,
            password_hash=get_password_hash(password),
            first_name=first_name or "",
            last_name=last_name or "",
            is_admin=email in self._settings.admin_emails,
            created_at=now,
            last_login=now,
            login_count=1,
        )
        self._store.add_user(user)
        self._track(user.id, "signup", method="email_password", firstName=user.first_name, lastName=user.last_name)
        token = self._issuer.issue(user.id)
        logger.info("[auth] New user registered: %s (%s)", email, user.id)
        return AuthResult(user, token, "Account created successfully! Welcome to EventHub.")

    def sign_in(self, email: Optional[str], password: Optional[str]) -> AuthResult:
        if not email or not password:
            raise ValidationError("Email and password are required")
        email = normalize_email(email)
        user = self._store.get_user_by_email(email)
        if user is None:
            self._track("unknown", "failed_login", email=email, reason="user_not_found")
            logger.warning("[auth] Failed login for unknown email %s", email)
            raise UnauthorizedError("Invalid credentials")
        if not verify_password(password, user.password_hash):
            self._track(user.id, "failed_login", email=email, reason="invalid_password")
            logger.warning("[auth] Failed login for %s: invalid password", email)
            raise UnauthorizedError("Invalid credentials")

        user = self._store.record_login(user.id, utcnow())
        self._track(user.id, "login", method="email_password", loginCount=user.login_count)
        token = self._issuer.issue(user.id)
        logger.info("[auth] User signed in: %s (%s) - Login #%d", email, user.id, user.login_count)
        return AuthResult(user, token, f"Welcome back, {user.first_name or 'User'}!")

    def social_sign_in(self, provider: Optional[str]) -> AuthResult:
        profile = SOCIAL_PROFILES.get(provider or "")
        if profile is None:
            raise ValidationError("Valid provider (google, facebook, github) is required")

        user = self._store.get_user_by_email(profile.email)
        if user is None:
            now = utcnow()
            user = self._store.add_user(User(
                id=profile.id,
                email=profile.email,
                first_name=profile.first_name,
                last_name=profile.last_name,
                created_at=now,
                last_login=now,
                login_count=1,
                is_email_verified=True,
                auth_provider=provider,
            ))
            self._track(user.id, "signup", method=f"social_{provider}", firstName=user.first_name, lastName=user.last_name)
            logger.info("[auth] New social user registered via %s: %s (%s)", provider, user.email, user.id)
            message = f"Welcome to EventHub, {user.first_name}! Your account has been created via {provider}."
        else:
            user = self._store.record_login(user.id, utcnow())
            self._track(user.id, "login", method=f"social_{provider}", loginCount=user.login_count)
            logger.info("[auth] Social user signed in via %s: %s - Login #%d", provider, user.email, user.login_count)
            message = f"Welcome back, {user.first_name}!"
        return AuthResult(user, self._issuer.issue(user.id), message)

    def sign_out(self, identity: Identity) -> None:
        self._issuer.revoke(identity)
        self._track(identity.user_id, "logout", sessionId=identity.session_id)
        logger.info("[auth] User signed out: %s", identity.user_id)

    def _track(self, user_id: str, action: str, **details: Any) -> None:
        self._store.record_activity(Activity(user_id=user_id, action=action, timestamp=utcnow(), details=details))
