"""Thread service layer.

Enforces the per-owner rules on top of the repository helpers: names are
unique per owner, an owner has a bounded number of threads, and every
operation on an existing thread is scoped to its owner.
"""
from __future__ import annotations

import logging
import uuid
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from actionthreads.core.config import get_settings
from actionthreads.core.errors import DuplicateThreadNameError, ThreadLimitReachedError
from actionthreads.models.thread import Thread
from actionthreads.repositories import thread as thread_repo
from actionthreads.repositories import ownership as ownership_repo
from actionthreads.services.ownership import verify_thread_ownership

__all__ = [
    "list_threads",
    "create_thread",
    "update_thread",
    "delete_thread",
]

logger = logging.getLogger("actionthreads.services.thread")

_UNIQUE_VIOLATION_SQLSTATE = "23505"


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = getattr(exc, "orig", None)
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate:
        return sqlstate == _UNIQUE_VIOLATION_SQLSTATE
    # sqlite reports constraint failures only through the message text
    return "UNIQUE constraint failed" in str(orig or exc)


async def list_threads(session: AsyncSession, *, user_id: uuid.UUID) -> list[Thread]:
    return list(await thread_repo.list_by_user(session, user_id))


async def create_thread(session: AsyncSession, *, user_id: uuid.UUID, name: str) -> Thread:
    if await thread_repo.name_taken(session, user_id, name):
        logger.info("thread.create.duplicate", extra={"user_id": user_id})
        raise DuplicateThreadNameError(name)

    limit = get_settings().thread_limit_per_user
    if await thread_repo.count_by_user(session, user_id) >= limit:
        logger.info("thread.create.limit_reached", extra={"user_id": user_id, "limit": limit})
        raise ThreadLimitReachedError(limit)

    try:
        thread = await thread_repo.create(session, user_id=user_id, name=name)
    except IntegrityError as exc:
        # lost a race with a concurrent create of the same name
        await session.rollback()
        if _is_unique_violation(exc):
            logger.info("thread.create.duplicate_race", extra={"user_id": user_id})
            raise DuplicateThreadNameError(name) from exc
        raise
    logger.info("thread.created", extra={"user_id": user_id, "thread_id": thread.id})
    return thread


async def update_thread(
    session: AsyncSession, *, user_id: uuid.UUID, thread_id: uuid.UUID, name: str
) -> Thread:
    thread = await verify_thread_ownership(session, user_id=user_id, thread_id=thread_id)
    if thread.name == name:
        return thread
    if await thread_repo.name_taken(session, user_id, name, exclude_id=thread_id):
        raise DuplicateThreadNameError(name)
    try:
        return await thread_repo.rename(session, thread, name)
    except IntegrityError as exc:
        await session.rollback()
        if _is_unique_violation(exc):
            raise DuplicateThreadNameError(name) from exc
        raise


async def delete_thread(session: AsyncSession, *, user_id: uuid.UUID, thread_id: uuid.UUID) -> None:
    """Delete a thread and everything under it.

    Idempotent: a thread that does not exist (or is not the caller's) is a
    silent no-op, exactly like deleting it twice.
    """
    thread = await ownership_repo.get_owned_thread(session, thread_id, user_id)
    if thread is None:
        return
    await thread_repo.delete_with_children(session, thread)
    logger.info("thread.deleted", extra={"user_id": user_id, "thread_id": thread_id})
