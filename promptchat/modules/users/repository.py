"""Repository protocol for users."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .models import User


class UserRepository(Protocol):
    """Abstract repository interface for user persistence."""

    async def get_by_id(self, user_id: str) -> User | None:
        ...

    async def get_by_email(self, email: str) -> User | None:
        ...

    async def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: str,
        is_active: bool,
    ) -> User:
        ...

    async def set_last_login(self, user_id: str, timestamp: datetime) -> None:
        ...
