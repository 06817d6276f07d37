import uuid
from datetime import datetime
from typing import Annotated
from pydantic import StringConstraints
from .base import APIModel, ORMBase
from actionthreads.models.thread import THREAD_NAME_MAX_LENGTH

ThreadName = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=THREAD_NAME_MAX_LENGTH)
]


class ThreadCreate(APIModel):
    name: ThreadName


class ThreadUpdate(APIModel):
    name: ThreadName


class ThreadRead(ORMBase):
    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    created_at: datetime
