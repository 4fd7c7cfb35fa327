"""User registration, login and token verification."""

from datetime import datetime, timedelta, UTC
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from fintrackr.config import Settings
from fintrackr.database.base import Database
from fintrackr.domain.entities import User
from fintrackr.domain.errors import (
    AuthError,
    ConflictError,
    InvalidCredentialsError,
    ServerError,
    ValidationError,
    INVALID_CREDENTIALS,
    INVALID_TOKEN,
    USER_ALREADY_EXISTS,
    missing_field,
)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def _require(name: str, value: Any) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(missing_field(name))
    return str(value).strip()


class AuthService:
    """Service for users and their bearer tokens."""

    def __init__(self, db: Database, settings: Settings):
        """Initialize auth service.

        Args:
            db: Database instance
            settings: Settings carrying the signing key and token lifetime
        """
        self.db = db
        self.settings = settings

    def create_token(self, user_id: int) -> str:
        """Issue a signed token for a user."""
        expire = datetime.now(UTC) + timedelta(minutes=self.settings.token_expire_minutes)
        payload = {"sub": str(user_id), "exp": expire}
        return jwt.encode(payload, self.settings.secret_key, algorithm=self.settings.algorithm)

    def register(self, name: Any, email: Any, password: Any) -> tuple[str, User]:
        """Register a user and issue a token.

        Raises:
            ValidationError: If a field is missing
            ConflictError: If the email is already registered
        """
        user_name = _require("name", name)
        user_email = _require("email", email).lower()
        if password is None or str(password) == "":
            raise ValidationError(missing_field("password"))

        if self.db.get_user_by_email(user_email) is not None:
            raise ConflictError(USER_ALREADY_EXISTS)

        user_id = self.db.create_user(
            name=user_name, email=user_email, password_hash=pwd_context.hash(str(password))
        )
        user = self.db.get_user(user_id)
        if user is None:
            raise ServerError(f"User {user_id} was not found after insert")
        return self.create_token(user.id), user

    def login(self, email: Any, password: Any) -> tuple[str, User]:
        """Check credentials and issue a token.

        Unknown emails and wrong passwords produce the same error.

        Raises:
            ValidationError: If a field is missing
            InvalidCredentialsError: If the credentials do not match
        """
        user_email = _require("email", email).lower()
        if password is None:
            raise ValidationError(missing_field("password"))

        user = self.db.get_user_by_email(user_email)
        if user is None:
            raise InvalidCredentialsError(INVALID_CREDENTIALS)

        password_hash = self.db.get_password_hash(user.id)
        if password_hash is None or not pwd_context.verify(str(password), password_hash):
            raise InvalidCredentialsError(INVALID_CREDENTIALS)

        self.db.update_last_login(user.id, datetime.now(UTC).replace(tzinfo=None))
        refreshed = self.db.get_user(user.id)
        return self.create_token(user.id), refreshed or user

    def authenticate(self, token: str) -> User:
        """Resolve a token to its user.

        Raises:
            AuthError: If the token is malformed, expired or its user is gone
        """
        try:
            payload = jwt.decode(
                token, self.settings.secret_key, algorithms=[self.settings.algorithm]
            )
            user_id = int(payload["sub"])
        except (JWTError, KeyError, TypeError, ValueError):
            raise AuthError(INVALID_TOKEN)

        user = self.db.get_user(user_id)
        if user is None:
            raise AuthError(INVALID_TOKEN)
        return user
