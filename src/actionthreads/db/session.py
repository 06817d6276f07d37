from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy import MetaData
from sqlalchemy.pool import NullPool
from actionthreads.core.config import get_settings
from datetime import datetime, timezone
from typing import AsyncGenerator

convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}
metadata = MetaData(naming_convention=convention)

class Base(DeclarativeBase):
    metadata = metadata


def utcnow() -> datetime:
    """Client-side timestamp default (microsecond precision keeps newest-first ordering stable)."""
    return datetime.now(timezone.utc)

_settings = get_settings()
_url = _settings.database_url_async
if _url.startswith("sqlite"):
    # sqlite connections are cheap and must not outlive the event loop that opened them
    engine = create_async_engine(_url, echo=False, future=True, poolclass=NullPool)
else:
    engine = create_async_engine(_url, echo=False, future=True, pool_pre_ping=True)
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One session per request; routes commit, anything uncommitted is rolled back on close."""
    async with AsyncSessionLocal() as session:  # type: ignore
        yield session
