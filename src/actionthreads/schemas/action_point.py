import uuid
from datetime import datetime
from typing import Annotated
from pydantic import StringConstraints, StrictBool, model_validator
from .base import APIModel, ORMBase
from actionthreads.models.action_point import ACTION_POINT_TITLE_MAX_LENGTH

ActionPointTitle = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=ACTION_POINT_TITLE_MAX_LENGTH)
]


class ActionPointCreate(APIModel):
    title: ActionPointTitle
    is_completed: StrictBool = False


class ActionPointUpdate(APIModel):
    title: ActionPointTitle | None = None
    is_completed: StrictBool | None = None

    @model_validator(mode="after")
    def _require_one_field(self):
        if self.title is None and self.is_completed is None:
            raise ValueError("At least one field (title or isCompleted) must be provided")
        return self


class ActionPointRead(ORMBase):
    id: uuid.UUID
    thread_id: uuid.UUID
    title: str
    is_completed: bool
    created_at: datetime
