import uuid
from datetime import datetime
from .base import ORMBase


class UserRead(ORMBase):
    id: uuid.UUID
    email: str
    created_at: datetime
