import uuid
from datetime import datetime
from typing import Annotated, Literal
from pydantic import StringConstraints
from .base import APIModel, ORMBase, ErrorDetail
from .action_point import ActionPointRead
from actionthreads.models.transcript import TRANSCRIPT_CONTENT_MAX_LENGTH

TranscriptContent = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=TRANSCRIPT_CONTENT_MAX_LENGTH)
]


class TranscriptCreate(APIModel):
    content: TranscriptContent


class TranscriptUpdate(APIModel):
    content: TranscriptContent


class TranscriptRead(ORMBase):
    id: uuid.UUID
    thread_id: uuid.UUID
    content: str
    created_at: datetime


class GenerationReport(APIModel):
    """Outcome of the action point generation that follows a transcript update.

    The transcript itself is already saved when this is reported; a failed
    generation does not roll it back.
    """
    status: Literal["succeeded", "failed"]
    created: list[ActionPointRead] = []
    error: ErrorDetail | None = None


class TranscriptUpdateRead(TranscriptRead):
    action_points_generation: GenerationReport
