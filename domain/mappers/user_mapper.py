"""
User domain mappers.
Handles transformation between ORM models and DTOs for account entities.
"""

from domain.models import AppUser, AuthSession
from domain.schemas.auth_schemas import SessionResponse, UserResponse


class UserMapper:
    """Mapper for user-related transformations."""

    @staticmethod
    def to_response(user: AppUser) -> UserResponse:
        """
        Convert AppUser ORM model to UserResponse DTO.

        The password hash never leaves this layer.
        """
        return UserResponse(
            user_id=user.user_id,
            email=user.email,
            name=user.name,
            created_at=user.created_at,
            last_login_at=user.last_login_at,
        )

    @staticmethod
    def to_session_response(session: AuthSession, user: AppUser) -> SessionResponse:
        return SessionResponse(
            token=session.token,
            expires_at=session.expires_at,
            user=UserMapper.to_response(user),
        )
