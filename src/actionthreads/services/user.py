"""User service layer.

Users are never created through the API: they are mirrored from the
identity provider's claims the first time a verified token is seen.
"""
from __future__ import annotations

import logging
import uuid
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from actionthreads.core.errors import AuthRequiredError
from actionthreads.models.user import User
from actionthreads.repositories.user import (
    get_by_id as repo_get_by_id,
    create as repo_create,
)

__all__ = [
    "user_id_from_subject",
    "get_or_provision_user",
]

logger = logging.getLogger("actionthreads.services.user")


def user_id_from_subject(subject: str) -> uuid.UUID:
    """Map an identity-provider subject to a stable local UUID.

    Subjects that already are UUIDs (e.g. Supabase) are used as-is; anything
    else (``auth0|abc``) gets a deterministic UUIDv5.
    """
    try:
        return uuid.UUID(subject)
    except ValueError:
        return uuid.uuid5(uuid.NAMESPACE_URL, f"auth0:{subject}")


async def get_or_provision_user(session: AsyncSession, *, subject: str, email: str | None) -> User:
    user_id = user_id_from_subject(subject)
    user = await repo_get_by_id(session, user_id)
    if user is not None:
        return user
    if not email:
        raise AuthRequiredError("User not provisioned and email claim missing")
    try:
        user = await repo_create(session, email=email, id=user_id)
        await session.commit()
    except IntegrityError:
        # a parallel first request provisioned the same subject, or the email is taken
        await session.rollback()
        user = await repo_get_by_id(session, user_id)
        if user is None:
            logger.info("user.provision.email_conflict", extra={"user_id": user_id})
            raise AuthRequiredError("Email is already linked to another account")
        return user
    logger.info("user.provisioned", extra={"user_id": user_id})
    return user
