"""Ownership-scoped lookups shared by the service layer.

Both helpers filter on the owner *inside* the query: a record owned by
someone else is indistinguishable from one that does not exist.
"""

import uuid
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from actionthreads.models.thread import Thread
from actionthreads.models.transcript import Transcript
from actionthreads.models.action_point import ActionPoint

__all__ = [
    "OwnedRow",
    "get_owned_thread",
    "get_owned_child",
]

ChildT = TypeVar("ChildT", Transcript, ActionPoint)
ChildModel = Union[type[Transcript], type[ActionPoint]]


@dataclass(frozen=True)
class OwnedRow(Generic[ChildT]):
    """A thread child together with the owner id of its parent thread."""

    item: ChildT
    owner_id: uuid.UUID


async def get_owned_thread(
    session: AsyncSession, thread_id: uuid.UUID, user_id: uuid.UUID
) -> Optional[Thread]:
    """Return the thread only if it exists *and* belongs to ``user_id``."""
    stmt = select(Thread).where(Thread.id == thread_id, Thread.user_id == user_id)
    res = await session.execute(stmt)
    return res.scalar_one_or_none()


async def get_owned_child(
    session: AsyncSession,
    model: ChildModel,
    child_id: uuid.UUID,
    user_id: uuid.UUID,
) -> Optional[OwnedRow]:
    """Return ``(child, parent owner id)`` for a transcript / action point.

    Executes a single query joining the child to its thread and filtering on
    the thread owner, so a foreign row simply yields no result.
    """
    stmt = (
        select(model, Thread.user_id)
        .join(Thread, model.thread_id == Thread.id)
        .where(model.id == child_id, Thread.user_id == user_id)
        .limit(1)
    )
    res = await session.execute(stmt)
    row = res.one_or_none()
    if row is None:
        return None
    item, owner_id = row
    return OwnedRow(item=item, owner_id=owner_id)
