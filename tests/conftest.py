"""Pytest configuration and shared fixtures."""

import os
import tempfile
from pathlib import Path
from types import SimpleNamespace
from typing import Any, AsyncGenerator, Optional

_TEST_DIR = Path(tempfile.mkdtemp(prefix="promptchat-tests-"))

# Settings are cached on first import, so the environment must be in place first.
os.environ.setdefault("ENVIRONMENT", "test")
os.environ["DATABASE__URL"] = f"sqlite+aiosqlite:///{_TEST_DIR / 'test.db'}"
os.environ.setdefault("SECURITY__SECRET_KEY", "test-secret-key-0123456789")
os.environ.setdefault("ANTHROPIC__API_KEY", "sk-ant-test-key")
os.environ.setdefault("ANTHROPIC__PROBE_ON_STARTUP", "false")
os.environ.setdefault("RATE_LIMIT__ENABLED", "false")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from promptchat.core.config import AnthropicSettings  # noqa: E402
from promptchat.core.security import create_access_token  # noqa: E402
from promptchat.infrastructure.database import Base, dispose_engine, get_engine, get_session_factory, init_db  # noqa: E402
from promptchat.interfaces.http.deps import get_generation_client  # noqa: E402
from promptchat.modules.generation import GenerationClient  # noqa: E402
from promptchat.modules.templates import PromptTemplate, TemplateCreateInput, TemplateService  # noqa: E402
from promptchat.modules.users import User, UserCreateInput, UserRole, UserService  # noqa: E402


class FakeMessages:
    """Stands in for ``AsyncAnthropic().messages``."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.text = "Rainfall follows seasonal monsoon patterns."
        self.input_tokens = 50
        self.output_tokens = 120
        self.content: Optional[list[Any]] = None
        self.error: Optional[Exception] = None

    async def create(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        content = self.content
        if content is None:
            content = [SimpleNamespace(type="text", text=self.text)]
        return SimpleNamespace(
            content=content,
            usage=SimpleNamespace(input_tokens=self.input_tokens, output_tokens=self.output_tokens),
            stop_reason="end_turn",
        )


class FakeAnthropic:
    def __init__(self) -> None:
        self.messages = FakeMessages()
        self.init_kwargs: list[dict[str, Any]] = []

    def __call__(self, **kwargs: Any) -> "FakeAnthropic":
        self.init_kwargs.append(kwargs)
        return self


# --- Database Fixtures ---


@pytest.fixture
async def database() -> AsyncGenerator[None, None]:
    """Fresh schema per test; the engine is rebuilt on each test's event loop."""
    await init_db()
    yield
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await dispose_engine()


@pytest.fixture
async def db_session(database) -> AsyncGenerator[AsyncSession, None]:
    async with get_session_factory()() as session:
        yield session


# --- Generation Fixtures ---


@pytest.fixture
def fake_anthropic() -> FakeAnthropic:
    return FakeAnthropic()


@pytest.fixture
def generation_client(fake_anthropic: FakeAnthropic) -> GenerationClient:
    return GenerationClient(
        AnthropicSettings(api_key="sk-ant-test-key", model="claude-3-5-sonnet-20241022"),
        client_factory=fake_anthropic,
    )


# --- HTTP Fixtures ---


@pytest.fixture
async def app(database, generation_client: GenerationClient):
    from promptchat.main import app as fastapi_app

    fastapi_app.dependency_overrides[get_generation_client] = lambda: generation_client
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client


# --- Domain Fixtures ---


async def create_user(
    session: AsyncSession,
    *,
    email: str,
    role: str = UserRole.USER.value,
    password: str = "secret123",
    name: str = "Test User",
) -> User:
    user = await UserService.with_session(session).register(
        UserCreateInput(name=name, email=email, password=password, role=role)
    )
    await session.commit()
    return user


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.email, user.role)}"}


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    return await create_user(db_session, email="user@example.com")


@pytest.fixture
async def test_admin(db_session: AsyncSession) -> User:
    return await create_user(db_session, email="admin@example.com", role=UserRole.ADMIN.value, name="Admin")


@pytest.fixture
def user_headers(test_user: User) -> dict[str, str]:
    return auth_headers(test_user)


@pytest.fixture
def admin_headers(test_admin: User) -> dict[str, str]:
    return auth_headers(test_admin)


@pytest.fixture
async def test_template(db_session: AsyncSession, test_admin: User) -> PromptTemplate:
    template = await TemplateService.with_session(db_session).create_template(
        TemplateCreateInput(
            name="T1",
            description="Summaries of arbitrary text",
            template="Summarize: {data}",
            system_instructions="Be terse.",
            category="general",
            tags=["Summary", " text "],
        ),
        created_by=test_admin.id,
    )
    await db_session.commit()
    return template
