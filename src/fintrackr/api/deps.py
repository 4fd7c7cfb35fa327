"""FastAPI dependencies: per-request database, settings and current user."""

from typing import Iterator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from fintrackr.config import Settings
from fintrackr.database.base import Database
from fintrackr.domain.auth import AuthService
from fintrackr.domain.entities import User
from fintrackr.domain.errors import AuthError, NO_TOKEN

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Iterator[Database]:
    """Yield a database handle with its own session for one request."""
    db = request.app.state.database.clone()
    try:
        yield db
    finally:
        db.disconnect()


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User:
    """Resolve the bearer token to its user.

    Raises:
        AuthError: If the token is missing or not valid
    """
    if credentials is None or not credentials.credentials:
        raise AuthError(NO_TOKEN)
    return AuthService(db, settings).authenticate(credentials.credentials)
