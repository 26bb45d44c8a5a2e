"""
API dependencies for dependency injection
"""

from typing import Generator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from adapters.document_store import DocumentStore
from app.clock import Clock, system_clock
from app.exceptions import StorageError, UnauthorizedError
from domain.models import AppUser, get_db_session
from services.auth_service import AuthService
from services.rollover_service import RolloverScheduler

bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session()


def get_clock() -> Clock:
    return system_clock


def get_document_store(request: Request) -> DocumentStore:
    """Document store opened by the application lifespan"""
    store = getattr(request.app.state, "document_store", None)
    if store is None:
        raise StorageError("Document store is not initialized")
    return store


def get_rollover_scheduler(request: Request) -> RolloverScheduler:
    scheduler = getattr(request.app.state, "rollover_scheduler", None)
    if scheduler is None:
        raise StorageError("Rollover scheduler is not initialized")
    return scheduler


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Not authenticated", code="MISSING_TOKEN")
    return credentials.credentials


def get_current_user(
    token: str = Depends(get_bearer_token),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> AppUser:
    return AuthService.resolve_session(db, token, clock)


def get_current_user_id(user: AppUser = Depends(get_current_user)) -> str:
    """String form of the user id, used as the document partition key"""
    return str(user.user_id)
