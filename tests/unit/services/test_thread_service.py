import uuid
import pytest
from sqlalchemy.exc import IntegrityError

from actionthreads.core.errors import DuplicateThreadNameError, ThreadLimitReachedError, ThreadNotFoundError
from actionthreads.models import User
from actionthreads.services import thread as thread_service
from actionthreads.services.thread import _is_unique_violation
from actionthreads.services.user import user_id_from_subject


class _PgError(Exception):
    sqlstate = "23505"


@pytest.mark.unit
def test_unique_violation_detection():
    assert _is_unique_violation(IntegrityError("INSERT", {}, _PgError()))
    sqlite = Exception("UNIQUE constraint failed: thread.user_id, thread.name")
    assert _is_unique_violation(IntegrityError("INSERT", {}, sqlite))
    fk = Exception("FOREIGN KEY constraint failed")
    assert not _is_unique_violation(IntegrityError("INSERT", {}, fk))


@pytest.mark.unit
def test_user_id_from_subject():
    raw = uuid.uuid4()
    assert user_id_from_subject(str(raw)) == raw
    mapped = user_id_from_subject("auth0|42")
    assert mapped == user_id_from_subject("auth0|42")
    assert mapped != user_id_from_subject("auth0|43")


@pytest.mark.asyncio
@pytest.mark.unit
async def test_create_thread_rules(db_session, monkeypatch, settings):
    monkeypatch.setattr(settings, "thread_limit_per_user", 2)
    user = User(email="svc@example.com")
    db_session.add(user)
    await db_session.flush()

    await thread_service.create_thread(db_session, user_id=user.id, name="one")
    with pytest.raises(DuplicateThreadNameError):
        await thread_service.create_thread(db_session, user_id=user.id, name="one")
    await thread_service.create_thread(db_session, user_id=user.id, name="two")
    with pytest.raises(ThreadLimitReachedError) as exc_info:
        await thread_service.create_thread(db_session, user_id=user.id, name="three")
    assert exc_info.value.limit == 2


@pytest.mark.asyncio
@pytest.mark.unit
async def test_update_unknown_thread(db_session):
    with pytest.raises(ThreadNotFoundError):
        await thread_service.update_thread(
            db_session, user_id=uuid.uuid4(), thread_id=uuid.uuid4(), name="x"
        )
