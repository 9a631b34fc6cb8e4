"""Domain models for users."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"
    SYSTEM = "system"


PRIVILEGED_ROLES = frozenset({UserRole.ADMIN.value, UserRole.SYSTEM.value})


@dataclass(slots=True)
class User:
    id: str
    name: str
    email: str
    role: str
    is_active: bool
    password_hash: str = field(repr=False)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    def is_privileged(self) -> bool:
        return self.role in PRIVILEGED_ROLES


@dataclass(slots=True)
class UserCreateInput:
    name: str
    email: str
    password: str
    role: str = UserRole.USER.value
    is_active: bool = True
