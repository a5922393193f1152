"""Authentication service: password hashing, JWT tokens, the auth gate,
registration and login.

Configuration (secret, algorithm, expiration window) is handed to
``TokenService`` at construction; nothing in this module reads the
environment.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache

from email_validator import EmailNotValidError, validate_email
from jose import JWTError, jwt
from passlib.context import CryptContext

from strix.repositories.base import UserRecord, UserStore
from strix.services.exceptions import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    InactiveUserError,
    InvalidCredentialsError,
    TokenVerificationError,
    UnauthenticatedError,
)

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10
DEFAULT_TOKEN_LIFETIME = timedelta(hours=24)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password with a fresh random salt."""
    return pwd_context.hash(password)


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    # Verified against when the email is unknown so both login failures cost one bcrypt check.
    return get_password_hash("strix-timing-dummy")


@dataclass(frozen=True)
class PublicUser:
    """User view safe to send to clients (no password hash)."""

    id: int
    username: str
    email: str
    is_admin: bool

    @classmethod
    def from_record(cls, user: UserRecord) -> "PublicUser":
        return cls(id=user.id, username=user.username, email=user.email, is_admin=user.is_admin)


# The authenticated caller carries the same fields as the public view.
CurrentUser = PublicUser


class TokenService:
    """Issues and verifies signed, time-limited bearer tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expiration: timedelta = DEFAULT_TOKEN_LIFETIME,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.expiration = expiration

    def issue(self, user_id: int) -> str:
        """Create a JWT whose subject is the user id."""
        expire = datetime.now(UTC) + self.expiration
        to_encode = {
            "sub": str(user_id),
            "exp": expire,
        }
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        """Return the user id embedded in a valid, unexpired token.

        Raises:
            TokenVerificationError: bad signature, expired, malformed, or a
                subject that is missing or not an integer.
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise TokenVerificationError(str(e)) from e

        if "exp" not in payload:
            raise TokenVerificationError("Token has no expiry")
        subject = payload.get("sub")
        try:
            return int(subject)
        except (TypeError, ValueError) as e:
            raise TokenVerificationError("Token subject is not a user id") from e


class AuthGate:
    """Resolves an ``Authorization`` header to an active user."""

    def __init__(self, users: UserStore, tokens: TokenService):
        self.users = users
        self.tokens = tokens

    @staticmethod
    def extract_token(raw_header: str | None) -> str | None:
        """Return the token segment of ``Bearer <token>``, or None."""
        if not raw_header:
            return None
        parts = raw_header.split()
        return parts[1] if len(parts) > 1 else None

    def authenticate(self, raw_header: str | None) -> CurrentUser:
        """Verify the bearer token and load its user.

        A missing token is 401; anything wrong with a supplied token, or a
        user that is gone or deactivated, is 403.
        """
        token = self.extract_token(raw_header)
        if not token:
            raise UnauthenticatedError("Access denied. No token provided.")

        try:
            user_id = self.tokens.verify(token)
        except TokenVerificationError as e:
            logger.debug(f"Token rejected: {e}")
            raise ForbiddenError("Invalid or expired token") from e

        user = self.users.get(user_id)
        if user is None or not user.is_active:
            logger.info(f"Token for missing or inactive user {user_id} rejected")
            raise ForbiddenError("Invalid or expired token")

        return CurrentUser.from_record(user)


def require_admin(current_user: CurrentUser) -> None:
    """Raise ForbiddenError unless the caller is an admin."""
    if not current_user.is_admin:
        raise ForbiddenError("Access denied. Admin rights required.")


class AuthService:
    """Registration and login on top of the credential store."""

    def __init__(self, users: UserStore, tokens: TokenService):
        self.users = users
        self.tokens = tokens

    def register(
        self, username: str | None, email: str | None, password: str | None
    ) -> tuple[str, PublicUser]:
        """Create a user and return a fresh token with the public view.

        The very first user becomes an admin. Counting and creating are two
        separate statements, so two concurrent first registrations may both
        be granted admin.
        """
        if not username or not email or not password:
            raise BadRequestError("Username, email and password are required")

        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError as e:
            raise BadRequestError("Invalid email address") from e

        if self.users.find_by_username_or_email(username, email):
            raise ConflictError("User with this username or email already exists")

        is_first_user = self.users.count() == 0
        user = self.users.create(
            username=username,
            email=email,
            password_hash=get_password_hash(password),
            is_admin=is_first_user,
        )
        logger.info(f"Registered user {user.id} ({user.username}), admin={user.is_admin}")

        return self.tokens.issue(user.id), PublicUser.from_record(user)

    def login(self, email: str | None, password: str | None) -> tuple[str, PublicUser]:
        """Check credentials and return a fresh token with the public view."""
        if not email or not password:
            raise BadRequestError("Email and password are required")

        user = self.users.find_by_email(email)
        if user is None:
            verify_password(password, _dummy_hash())
            logger.warning("Login failed: unknown email")
            raise InvalidCredentialsError()

        if not verify_password(password, user.password_hash):
            logger.warning(f"Login failed: wrong password for user {user.id}")
            raise InvalidCredentialsError()

        if not user.is_active:
            raise InactiveUserError()

        return self.tokens.issue(user.id), PublicUser.from_record(user)
