"""
Create the default administrator account used for the first login.
"""
import asyncio
import os

from sqlalchemy import select

from promptchat.db.models import User
from promptchat.infrastructure.database import get_session, init_db
from promptchat.modules.users import UserCreateInput, UserRole, UserService
from promptchat.modules.users.models import PRIVILEGED_ROLES

ADMIN_NAME = os.environ.get("ADMIN_NAME", "Administrator")
ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD", "admin12345")


async def create_default_admin():
    await init_db()

    async for db in get_session():
        stmt = select(User).where(User.role.in_(PRIVILEGED_ROLES)).limit(1)
        result = await db.execute(stmt)
        existing_admin = result.scalar_one_or_none()

        if existing_admin:
            print(f"An administrator already exists ({existing_admin.email}), nothing to do")
            return

        service = UserService.with_session(db)
        await service.register(
            UserCreateInput(
                name=ADMIN_NAME,
                email=ADMIN_EMAIL,
                password=ADMIN_PASSWORD,
                role=UserRole.ADMIN.value,
                is_active=True,
            )
        )

        print("=" * 50)
        print("Default administrator created")
        print("=" * 50)
        print(f"Email:    {ADMIN_EMAIL}")
        print(f"Password: {ADMIN_PASSWORD}")
        print("=" * 50)
        print("Change the password after the first login!")
        print("=" * 50)


if __name__ == "__main__":
    asyncio.run(create_default_admin())
