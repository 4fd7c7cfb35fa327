"""Registration, login and current-user routes."""

from fastapi import APIRouter, Depends

from fintrackr.api.deps import get_current_user, get_db, get_settings
from fintrackr.api.schemas import AuthResponse, LoginRequest, MeResponse, RegisterRequest, UserOut
from fintrackr.config import Settings
from fintrackr.database.base import Database
from fintrackr.domain.auth import AuthService
from fintrackr.domain.entities import User

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(
    body: RegisterRequest,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    token, user = AuthService(db, settings).register(body.name, body.email, body.password)
    return AuthResponse(token=token, user=UserOut.from_entity(user))


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    token, user = AuthService(db, settings).login(body.email, body.password)
    return AuthResponse(token=token, user=UserOut.from_entity(user))


@router.get("/me", response_model=MeResponse)
def me(current_user: User = Depends(get_current_user)):
    return MeResponse(user=UserOut.from_entity(current_user))
