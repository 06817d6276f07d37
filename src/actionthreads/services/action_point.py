"""Action point service layer."""
from __future__ import annotations

import uuid
from sqlalchemy.ext.asyncio import AsyncSession

from actionthreads.models.action_point import ActionPoint
from actionthreads.repositories import action_point as action_point_repo
from actionthreads.services.ownership import (
    verify_thread_ownership,
    verify_action_point_ownership,
)

__all__ = [
    "list_action_points",
    "create_action_point",
    "update_action_point",
    "delete_action_point",
]


async def list_action_points(
    session: AsyncSession,
    *,
    user_id: uuid.UUID,
    thread_id: uuid.UUID,
    completed: bool | None = None,
) -> list[ActionPoint]:
    await verify_thread_ownership(session, user_id=user_id, thread_id=thread_id)
    return list(await action_point_repo.list_by_thread(session, thread_id, completed=completed))


async def create_action_point(
    session: AsyncSession,
    *,
    user_id: uuid.UUID,
    thread_id: uuid.UUID,
    title: str,
    is_completed: bool = False,
) -> ActionPoint:
    await verify_thread_ownership(session, user_id=user_id, thread_id=thread_id)
    return await action_point_repo.create(
        session, thread_id=thread_id, title=title, is_completed=is_completed
    )


async def update_action_point(
    session: AsyncSession,
    *,
    user_id: uuid.UUID,
    action_point_id: uuid.UUID,
    title: str | None = None,
    is_completed: bool | None = None,
) -> ActionPoint:
    """Change the title and/or toggle completion (either direction).

    The "at least one field" rule is enforced by ``ActionPointUpdate``
    before this is reached; with neither field set this is a plain read.
    """
    action_point = await verify_action_point_ownership(
        session, user_id=user_id, action_point_id=action_point_id
    )
    return await action_point_repo.update(
        session, action_point, title=title, is_completed=is_completed
    )


async def delete_action_point(
    session: AsyncSession, *, user_id: uuid.UUID, action_point_id: uuid.UUID
) -> None:
    action_point = await verify_action_point_ownership(
        session, user_id=user_id, action_point_id=action_point_id
    )
    await action_point_repo.delete(session, action_point)
