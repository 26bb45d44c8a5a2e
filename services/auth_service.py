from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple
import logging
import secrets

import bcrypt
from sqlalchemy.orm import Session

from app.clock import Clock, system_clock
from app.config import settings
from app.exceptions import ConflictError, ServiceValidationError, UnauthorizedError
from domain.models import AppUser, AuthSession
from repositories import AuthSessionRepository, UserRepository

logger = logging.getLogger("supplement_tracker.auth")

MIN_PASSWORD_LENGTH = 6
# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class AuthService:
    """Accounts, password checks and bearer sessions"""

    @staticmethod
    def hash_password(password: str) -> str:
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")

    @staticmethod
    def verify_password(password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            return False

    @staticmethod
    def validate_password(password: str) -> None:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ServiceValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                code="WEAK_PASSWORD",
            )
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ServiceValidationError(
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes",
                code="PASSWORD_TOO_LONG",
            )

    @staticmethod
    def create_account(
        db: Session,
        email: str,
        password: str,
        name: str,
        clock: Clock = system_clock,
    ) -> AppUser:
        """
        Register a new account.

        Raises:
            ServiceValidationError: Missing name or unacceptable password
            ConflictError: The email is already registered
        """
        name = name.strip()
        if not name:
            raise ServiceValidationError("Name is required", code="NAME_REQUIRED")
        AuthService.validate_password(password)

        user_repo = UserRepository(db)
        if user_repo.get_by_email(email):
            logger.warning(f"Registration rejected, email in use: {email}")
            raise ConflictError(
                "Account with this email already exists", code="EMAIL_TAKEN"
            )

        user = user_repo.create_user(
            email=email,
            name=name,
            password_hash=AuthService.hash_password(password),
            now=clock.now().astimezone(timezone.utc),
        )
        logger.info(f"Account created user_id={user.user_id}")
        return user

    @staticmethod
    def login(
        db: Session,
        email: str,
        password: str,
        clock: Clock = system_clock,
        ttl_days: Optional[int] = None,
    ) -> Tuple[AuthSession, AppUser]:
        """
        Check credentials and open a session.

        Returns:
            Tuple of (AuthSession, AppUser)

        Raises:
            UnauthorizedError: Unknown email or wrong password
        """
        user_repo = UserRepository(db)
        user = user_repo.get_by_email(email)
        if user is None or not AuthService.verify_password(password, user.password_hash):
            logger.warning(f"Failed login for {email}")
            raise UnauthorizedError("Invalid email or password", code="INVALID_CREDENTIALS")

        now = clock.now().astimezone(timezone.utc)
        ttl = timedelta(days=ttl_days or settings.session_ttl_days)
        session = AuthSessionRepository(db).create_session(
            user_id=user.user_id,
            token=secrets.token_urlsafe(32),
            now=now,
            expires_at=now + ttl,
        )
        user_repo.touch_login(user, now)
        logger.info(f"Login user_id={user.user_id}")
        return session, user

    @staticmethod
    def resolve_session(
        db: Session, token: str, clock: Clock = system_clock
    ) -> AppUser:
        """
        Return the user owning a live session token.

        Expired sessions are deleted when seen.

        Raises:
            UnauthorizedError: Unknown or expired token
        """
        session_repo = AuthSessionRepository(db)
        session = session_repo.get_by_id(token)
        if session is None:
            raise UnauthorizedError("Not authenticated", code="INVALID_SESSION")

        if _as_utc(session.expires_at) <= clock.now().astimezone(timezone.utc):
            user_id = session.user_id
            session_repo.delete(session.token)
            logger.info(f"Expired session removed for user_id={user_id}")
            raise UnauthorizedError("Session expired", code="SESSION_EXPIRED")

        user = UserRepository(db).get_by_id(session.user_id)
        if user is None:
            raise UnauthorizedError("Not authenticated", code="INVALID_SESSION")
        return user

    @staticmethod
    def logout(db: Session, token: str) -> bool:
        session_repo = AuthSessionRepository(db)
        session = session_repo.get_by_id(token)
        if session is None:
            return False
        user_id = session.user_id
        session_repo.delete(token)
        logger.info(f"Logout user_id={user_id}")
        return True
