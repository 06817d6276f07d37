"""Repository helpers for the Thread model.

All helpers take the owner id explicitly; there is no lookup by thread id
alone in this module.
"""

import uuid
from typing import Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, delete

from actionthreads.models.thread import Thread
from actionthreads.models.transcript import Transcript
from actionthreads.models.action_point import ActionPoint

__all__ = [
    "list_by_user",
    "count_by_user",
    "name_taken",
    "create",
    "rename",
    "delete_with_children",
]


async def list_by_user(session: AsyncSession, user_id: uuid.UUID) -> Sequence[Thread]:
    """Threads of one owner, newest first."""
    stmt = select(Thread).where(Thread.user_id == user_id).order_by(Thread.created_at.desc())
    res = await session.execute(stmt)
    return list(res.scalars().all())


async def count_by_user(session: AsyncSession, user_id: uuid.UUID) -> int:
    res = await session.execute(select(func.count(Thread.id)).where(Thread.user_id == user_id))
    return int(res.scalar_one())


async def name_taken(
    session: AsyncSession,
    user_id: uuid.UUID,
    name: str,
    exclude_id: uuid.UUID | None = None,
) -> bool:
    """True when another thread of ``user_id`` already uses ``name`` (case-sensitive)."""
    stmt = select(Thread.id).where(Thread.user_id == user_id, Thread.name == name)
    if exclude_id is not None:
        stmt = stmt.where(Thread.id != exclude_id)
    res = await session.execute(stmt.limit(1))
    return res.scalar_one_or_none() is not None


async def create(
    session: AsyncSession,
    *,
    user_id: uuid.UUID,
    name: str,
) -> Thread:
    """Insert a thread and flush.

    The flush surfaces ``IntegrityError`` for a concurrent duplicate name;
    callers decide how to report it.
    """
    thread = Thread(user_id=user_id, name=name)
    session.add(thread)
    await session.flush()
    return thread


async def rename(session: AsyncSession, thread: Thread, name: str) -> Thread:
    if thread.name != name:
        thread.name = name
        await session.flush()
    return thread


async def delete_with_children(session: AsyncSession, thread: Thread) -> None:
    """Hard delete a thread together with its transcripts and action points.

    Children are removed explicitly so the cascade also holds on engines that
    do not enforce ``ON DELETE CASCADE`` (SQLite without the FK pragma).
    """
    await session.execute(delete(Transcript).where(Transcript.thread_id == thread.id))
    await session.execute(delete(ActionPoint).where(ActionPoint.thread_id == thread.id))
    await session.execute(
        delete(Thread).where(Thread.id == thread.id, Thread.user_id == thread.user_id)
    )
    await session.flush()
