import logging
import uuid
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from actionthreads.api import deps
from actionthreads.core.errors import ActionPointGenerationError
from actionthreads.core.modelhub import Summarizer
from actionthreads.models.user import User
from actionthreads.schemas.action_point import ActionPointRead
from actionthreads.schemas.base import ErrorDetail, ErrorResponse
from actionthreads.schemas.transcript import (
    GenerationReport,
    TranscriptCreate,
    TranscriptRead,
    TranscriptUpdate,
    TranscriptUpdateRead,
)
from actionthreads.services.generation import generate_action_points
from actionthreads.services.transcript import (
    create_transcript,
    delete_transcript,
    get_current_transcript,
    get_transcript,
    list_transcripts,
    update_transcript,
)

router = APIRouter(tags=["transcripts"])
logger = logging.getLogger("actionthreads.api.transcripts")

_NOT_FOUND = {404: {"model": ErrorResponse}}


@router.get("/threads/{thread_id}/transcripts", response_model=list[TranscriptRead],
            summary="List transcripts of a thread", responses=_NOT_FOUND)
async def list_transcripts_route(
    thread_id: uuid.UUID,
    session: AsyncSession = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    return await list_transcripts(session, user_id=current_user.id, thread_id=thread_id)


@router.post("/threads/{thread_id}/transcripts", response_model=TranscriptRead,
             status_code=status.HTTP_201_CREATED, summary="Add a transcript to a thread",
             responses=_NOT_FOUND)
async def create_transcript_route(
    thread_id: uuid.UUID,
    payload: TranscriptCreate,
    session: AsyncSession = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    transcript = await create_transcript(
        session, user_id=current_user.id, thread_id=thread_id, content=payload.content
    )
    await session.commit()
    return transcript


@router.get("/threads/{thread_id}/transcripts/current", response_model=TranscriptRead,
            summary="Get the newest transcript of a thread", responses=_NOT_FOUND)
async def get_current_transcript_route(
    thread_id: uuid.UUID,
    session: AsyncSession = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    return await get_current_transcript(session, user_id=current_user.id, thread_id=thread_id)


@router.get("/transcripts/{transcript_id}", response_model=TranscriptRead,
            summary="Get a transcript", responses=_NOT_FOUND)
async def get_transcript_route(
    transcript_id: uuid.UUID,
    session: AsyncSession = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    return await get_transcript(session, user_id=current_user.id, transcript_id=transcript_id)


@router.patch("/transcripts/{transcript_id}", response_model=TranscriptUpdateRead,
              summary="Update a transcript and derive action points from it",
              description="The new content is saved first. Action point generation runs "
                          "afterwards; its outcome is reported in `actionPointsGeneration` "
                          "and a failure there does not undo the update.",
              responses=_NOT_FOUND)
async def update_transcript_route(
    transcript_id: uuid.UUID,
    payload: TranscriptUpdate,
    session: AsyncSession = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
    summarizer: Summarizer = Depends(deps.get_summarizer),
):
    transcript = await update_transcript(
        session, user_id=current_user.id, transcript_id=transcript_id, content=payload.content
    )
    await session.commit()
    saved = TranscriptRead.model_validate(transcript)

    try:
        created = await generate_action_points(
            session,
            user_id=current_user.id,
            thread_id=saved.thread_id,
            content=saved.content,
            summarizer=summarizer,
        )
    except ActionPointGenerationError as exc:
        await session.rollback()
        logger.warning(
            "transcript.generation.failed",
            extra={"transcript_id": saved.id, "thread_id": saved.thread_id, "code": exc.code},
        )
        report = GenerationReport(status="failed", error=ErrorDetail(code=exc.code, message=exc.message))
    else:
        await session.commit()
        report = GenerationReport(
            status="succeeded", created=[ActionPointRead.model_validate(ap) for ap in created]
        )
    return TranscriptUpdateRead(**saved.model_dump(), action_points_generation=report)


@router.delete("/transcripts/{transcript_id}", status_code=status.HTTP_204_NO_CONTENT,
               summary="Delete a transcript", responses=_NOT_FOUND)
async def delete_transcript_route(
    transcript_id: uuid.UUID,
    session: AsyncSession = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    await delete_transcript(session, user_id=current_user.id, transcript_id=transcript_id)
    await session.commit()
    return None
