"""Account registration, login and session routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import (
    get_bearer_token,
    get_clock,
    get_current_user,
    get_db,
    get_rollover_scheduler,
)
from app.clock import Clock
from domain.mappers import UserMapper
from domain.models import AppUser
from domain.schemas.auth_schemas import (
    LoginRequest,
    RegisterRequest,
    SessionResponse,
    UserResponse,
)
from services.auth_service import AuthService
from services.rollover_service import RolloverScheduler

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger("supplement_tracker.api.auth")


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """
    Create an account.

    Errors:
    - 400: Missing name, password shorter than 6 characters or longer than 72 bytes
    - 409: Email already registered
    """
    user = AuthService.create_account(
        db, payload.email, payload.password, payload.name, clock
    )
    return UserMapper.to_response(user)


@router.post("/login", response_model=SessionResponse)
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """Exchange email and password for a bearer token"""
    session, user = AuthService.login(db, payload.email, payload.password, clock)
    return UserMapper.to_session_response(session, user)


@router.post("/logout")
def logout(
    token: str = Depends(get_bearer_token),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    scheduler: RolloverScheduler = Depends(get_rollover_scheduler),
):
    """End the current session and stop watching the user's day"""
    user_id = str(user.user_id)
    AuthService.logout(db, token)
    scheduler.untrack(user_id)
    return {"status": "ok"}


@router.get("/me", response_model=UserResponse)
def me(user: AppUser = Depends(get_current_user)):
    return UserMapper.to_response(user)
