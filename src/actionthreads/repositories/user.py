import uuid
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional
from actionthreads.models.user import User

async def get_by_id(session: AsyncSession, id: uuid.UUID) -> Optional[User]:
    res = await session.execute(select(User).where(User.id == id))
    return res.scalar_one_or_none()

async def create(session: AsyncSession, email: str, id: uuid.UUID) -> User:
    """Insert a user mirrored from identity claims (flushed, not committed)."""
    user = User(email=email, id=id)
    session.add(user)
    await session.flush()
    return user
