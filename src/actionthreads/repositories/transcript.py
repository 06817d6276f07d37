"""Repository helpers for the Transcript model.

Lookups here are unscoped by owner; go through
``actionthreads.services.ownership`` before calling them with a user-supplied id.
"""

import uuid
from typing import Optional, Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from actionthreads.models.transcript import Transcript

__all__ = [
    "list_by_thread",
    "get_latest",
    "create",
    "update_content",
    "delete",
]


async def list_by_thread(session: AsyncSession, thread_id: uuid.UUID) -> Sequence[Transcript]:
    stmt = (
        select(Transcript)
        .where(Transcript.thread_id == thread_id)
        .order_by(Transcript.created_at.desc())
    )
    res = await session.execute(stmt)
    return list(res.scalars().all())


async def get_latest(session: AsyncSession, thread_id: uuid.UUID) -> Optional[Transcript]:
    """Most recently created transcript of a thread (the "current" one)."""
    stmt = (
        select(Transcript)
        .where(Transcript.thread_id == thread_id)
        .order_by(Transcript.created_at.desc())
        .limit(1)
    )
    res = await session.execute(stmt)
    return res.scalar_one_or_none()


async def create(
    session: AsyncSession,
    *,
    thread_id: uuid.UUID,
    content: str,
) -> Transcript:
    transcript = Transcript(thread_id=thread_id, content=content)
    session.add(transcript)
    await session.flush()
    return transcript


async def update_content(session: AsyncSession, transcript: Transcript, content: str) -> Transcript:
    transcript.content = content
    await session.flush()
    return transcript


async def delete(session: AsyncSession, transcript: Transcript) -> None:
    await session.delete(transcript)
    await session.flush()
