"""Repository helpers for the ActionPoint model."""

import uuid
from typing import Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from actionthreads.models.action_point import ActionPoint

__all__ = [
    "list_by_thread",
    "create",
    "update",
    "delete",
]


async def list_by_thread(
    session: AsyncSession,
    thread_id: uuid.UUID,
    completed: bool | None = None,
) -> Sequence[ActionPoint]:
    """Action points of a thread, newest first, optionally filtered by completion."""
    stmt = select(ActionPoint).where(ActionPoint.thread_id == thread_id)
    if completed is not None:
        stmt = stmt.where(ActionPoint.is_completed == completed)
    res = await session.execute(stmt.order_by(ActionPoint.created_at.desc()))
    return list(res.scalars().all())


async def create(
    session: AsyncSession,
    *,
    thread_id: uuid.UUID,
    title: str,
    is_completed: bool = False,
) -> ActionPoint:
    action_point = ActionPoint(
        thread_id=thread_id,
        title=title,
        is_completed=is_completed,
    )
    session.add(action_point)
    await session.flush()
    return action_point


async def update(
    session: AsyncSession,
    action_point: ActionPoint,
    *,
    title: str | None = None,
    is_completed: bool | None = None,
) -> ActionPoint:
    if title is not None:
        action_point.title = title
    if is_completed is not None:
        action_point.is_completed = is_completed
    await session.flush()
    return action_point


async def delete(session: AsyncSession, action_point: ActionPoint) -> None:
    await session.delete(action_point)
    await session.flush()
