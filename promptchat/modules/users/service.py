"""Domain services for user registration and authentication."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from promptchat.core.crypto import hash_password, verify_password

from .exceptions import InvalidCredentialsError, UserAlreadyExistsError
from .models import User, UserCreateInput
from .repository import UserRepository

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserService:
    """Encapsulates core user use cases."""

    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "UserService":
        from promptchat.infrastructure.database.repositories.user_repository import SqlUserRepository

        return cls(SqlUserRepository(session))

    async def get_by_id(self, user_id: str) -> User | None:
        return await self._repository.get_by_id(user_id)

    async def get_active_by_id(self, user_id: str) -> User | None:
        user = await self._repository.get_by_id(user_id)
        if user is None or not user.is_active:
            return None
        return user

    async def get_by_email(self, email: str) -> User | None:
        return await self._repository.get_by_email(normalize_email(email))

    async def register(self, payload: UserCreateInput) -> User:
        email = normalize_email(payload.email)
        existing = await self._repository.get_by_email(email)
        if existing is not None:
            raise UserAlreadyExistsError()

        user = await self._repository.create_user(
            name=payload.name.strip(),
            email=email,
            password_hash=hash_password(payload.password),
            role=payload.role,
            is_active=payload.is_active,
        )
        logger.info("User registered: id=%s email=%s", user.id, user.email)
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """Return the active user for these credentials and stamp the login time."""
        user = await self._repository.get_by_email(normalize_email(email))
        if user is None or not user.is_active or not verify_password(password, user.password_hash):
            logger.info("Failed login attempt for %s", normalize_email(email))
            raise InvalidCredentialsError()

        now = datetime.now(timezone.utc)
        await self._repository.set_last_login(user.id, now)
        user.last_login_at = now
        logger.info("User authenticated: id=%s", user.id)
        return user
