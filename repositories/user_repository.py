"""
User Repository - Data access layer for accounts and login sessions
"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from repositories.base import BaseRepository
from domain.models import AppUser, AuthSession
from app.exceptions import ConflictError


class UserRepository(BaseRepository[AppUser]):
    """Repository for user data access"""

    def __init__(self, db: Session):
        super().__init__(db, AppUser)

    def get_by_id(self, user_id: UUID) -> Optional[AppUser]:
        """Get user by ID"""
        return self.db.query(AppUser).filter(AppUser.user_id == user_id).first()

    def get_by_email(self, email: str) -> Optional[AppUser]:
        """Get user by email (stored lower-cased)"""
        return (
            self.db.query(AppUser)
            .filter(AppUser.email == email.strip().lower())
            .first()
        )

    def create_user(
        self, email: str, name: str, password_hash: str, now: datetime
    ) -> AppUser:
        """Create a new user"""
        user = AppUser(
            email=email.strip().lower(),
            name=name,
            password_hash=password_hash,
            created_at=now,
            last_login_at=now,
        )
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
            return user
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(
                "Account with this email already exists", code="EMAIL_TAKEN"
            )

    def touch_login(self, user: AppUser, now: datetime) -> AppUser:
        """Record a successful login"""
        user.last_login_at = now
        self.db.commit()
        self.db.refresh(user)
        return user


class AuthSessionRepository(BaseRepository[AuthSession]):
    """Repository for login session tokens"""

    def __init__(self, db: Session):
        super().__init__(db, AuthSession)

    def get_by_id(self, token: str) -> Optional[AuthSession]:
        return self.db.query(AuthSession).filter(AuthSession.token == token).first()

    def create_session(
        self, user_id: UUID, token: str, now: datetime, expires_at: datetime
    ) -> AuthSession:
        session = AuthSession(
            token=token, user_id=user_id, created_at=now, expires_at=expires_at
        )
        return self.create(session)
