"""Ownership guard.

Every read or mutation of a thread, transcript or action point goes through
one of these helpers first. A record that does not exist and a record owned
by another user produce the same not-found error, so callers can never probe
for other users' ids.
"""

import uuid
from sqlalchemy.ext.asyncio import AsyncSession

from actionthreads.core.errors import (
    ThreadNotFoundError,
    TranscriptNotFoundError,
    ActionPointNotFoundError,
)
from actionthreads.models.thread import Thread
from actionthreads.models.transcript import Transcript
from actionthreads.models.action_point import ActionPoint
from actionthreads.repositories import ownership as ownership_repo

__all__ = [
    "verify_thread_ownership",
    "verify_transcript_ownership",
    "verify_action_point_ownership",
]


async def verify_thread_ownership(
    session: AsyncSession, *, user_id: uuid.UUID, thread_id: uuid.UUID
) -> Thread:
    thread = await ownership_repo.get_owned_thread(session, thread_id, user_id)
    if thread is None:
        raise ThreadNotFoundError(thread_id)
    return thread


async def verify_transcript_ownership(
    session: AsyncSession, *, user_id: uuid.UUID, transcript_id: uuid.UUID
) -> Transcript:
    owned = await ownership_repo.get_owned_child(session, Transcript, transcript_id, user_id)
    if owned is None or owned.owner_id != user_id:
        raise TranscriptNotFoundError(transcript_id)
    return owned.item


async def verify_action_point_ownership(
    session: AsyncSession, *, user_id: uuid.UUID, action_point_id: uuid.UUID
) -> ActionPoint:
    owned = await ownership_repo.get_owned_child(session, ActionPoint, action_point_id, user_id)
    if owned is None or owned.owner_id != user_id:
        raise ActionPointNotFoundError(action_point_id)
    return owned.item
