"""Transcript service layer.

Transcripts are reached either through their thread (list / create / current)
or directly by id (get / update / delete); both paths verify ownership first.
Action point generation after an update is orchestrated by the caller, see
``actionthreads.services.generation``.
"""
from __future__ import annotations

import uuid
from sqlalchemy.ext.asyncio import AsyncSession

from actionthreads.core.errors import TranscriptNotFoundError
from actionthreads.models.transcript import Transcript
from actionthreads.repositories import transcript as transcript_repo
from actionthreads.services.ownership import (
    verify_thread_ownership,
    verify_transcript_ownership,
)

__all__ = [
    "list_transcripts",
    "create_transcript",
    "get_transcript",
    "get_current_transcript",
    "update_transcript",
    "delete_transcript",
]


async def list_transcripts(
    session: AsyncSession, *, user_id: uuid.UUID, thread_id: uuid.UUID
) -> list[Transcript]:
    await verify_thread_ownership(session, user_id=user_id, thread_id=thread_id)
    return list(await transcript_repo.list_by_thread(session, thread_id))


async def create_transcript(
    session: AsyncSession, *, user_id: uuid.UUID, thread_id: uuid.UUID, content: str
) -> Transcript:
    await verify_thread_ownership(session, user_id=user_id, thread_id=thread_id)
    return await transcript_repo.create(session, thread_id=thread_id, content=content)


async def get_transcript(
    session: AsyncSession, *, user_id: uuid.UUID, transcript_id: uuid.UUID
) -> Transcript:
    return await verify_transcript_ownership(session, user_id=user_id, transcript_id=transcript_id)


async def get_current_transcript(
    session: AsyncSession, *, user_id: uuid.UUID, thread_id: uuid.UUID
) -> Transcript:
    """Newest transcript of an owned thread; not-found when the thread has none."""
    await verify_thread_ownership(session, user_id=user_id, thread_id=thread_id)
    transcript = await transcript_repo.get_latest(session, thread_id)
    if transcript is None:
        raise TranscriptNotFoundError()
    return transcript


async def update_transcript(
    session: AsyncSession, *, user_id: uuid.UUID, transcript_id: uuid.UUID, content: str
) -> Transcript:
    transcript = await verify_transcript_ownership(
        session, user_id=user_id, transcript_id=transcript_id
    )
    return await transcript_repo.update_content(session, transcript, content)


async def delete_transcript(
    session: AsyncSession, *, user_id: uuid.UUID, transcript_id: uuid.UUID
) -> None:
    transcript = await verify_transcript_ownership(
        session, user_id=user_id, transcript_id=transcript_id
    )
    await transcript_repo.delete(session, transcript)
