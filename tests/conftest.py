import os
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession
from typing import AsyncGenerator

# Configure database for tests via settings module rather than hardcoding directly.
# Allow overriding with TEST_DATABASE_URL; fall back to a local sqlite file.
test_db_url = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///./tests/test.db")
os.environ.setdefault("DATABASE_URL", test_db_url)

from actionthreads.core import config as _config  # noqa: E402
_config.get_settings.cache_clear()  # ensure new env vars are picked up # type: ignore[attr-defined]
_settings = _config.get_settings()

from actionthreads.api import deps  # noqa: E402
from actionthreads.api.main import app  # noqa: E402
from actionthreads.db.session import AsyncSessionLocal, engine, Base  # noqa: E402
from actionthreads.models import User, Thread, Transcript, ActionPoint  # noqa: E402
from sqlalchemy import delete  # noqa: E402


class StubSummarizer:
    """Stands in for the model provider; replies with ``reply`` or raises ``error``."""

    def __init__(self, reply: str = "[]", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest_asyncio.fixture(autouse=True, scope="session")
async def prepare_db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

@pytest.fixture(scope="session")
def settings():
    """Expose application settings to tests if needed."""
    return _settings

@pytest_asyncio.fixture()
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:  # type: ignore
        yield session

@pytest_asyncio.fixture()
async def client():
    # httpx >=0.28 removed the 'app=' shortcut; use ASGITransport explicitly
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

@pytest_asyncio.fixture(autouse=True)
async def _clear_tables():
    """Ensure isolated tests by clearing all tables before each test.
    Order matters due to FK constraints: ActionPoint/Transcript -> Thread -> User.
    """
    async with AsyncSessionLocal() as session:  # type: ignore
        # delete in child->parent order
        await session.execute(delete(ActionPoint))
        await session.execute(delete(Transcript))
        await session.execute(delete(Thread))
        await session.execute(delete(User))
        await session.commit()
    yield

@pytest.fixture(autouse=True)
def _reset_overrides():
    yield
    app.dependency_overrides.clear()

@pytest.fixture()
def summarizer() -> StubSummarizer:
    """Replaces the model provider for every request of the test."""
    stub = StubSummarizer()
    app.dependency_overrides[deps.get_summarizer] = lambda: stub
    return stub

async def _make_user(email: str) -> User:
    async with AsyncSessionLocal() as session:  # type: ignore
        user = User(email=email)
        session.add(user)
        await session.commit()
        return user

@pytest_asyncio.fixture()
async def alice() -> User:
    return await _make_user("alice@example.com")

@pytest_asyncio.fixture()
async def bob() -> User:
    return await _make_user("bob@example.com")

@pytest.fixture()
def act_as():
    """Make subsequent requests authenticate as ``user``."""
    def _act_as(user: User) -> None:
        app.dependency_overrides[deps.get_current_user] = lambda: user
    return _act_as
