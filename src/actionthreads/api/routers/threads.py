import uuid
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from actionthreads.api import deps
from actionthreads.models.user import User
from actionthreads.schemas.base import ErrorResponse
from actionthreads.schemas.thread import ThreadCreate, ThreadRead, ThreadUpdate
from actionthreads.services.thread import (
    create_thread,
    delete_thread,
    list_threads,
    update_thread,
)

router = APIRouter(prefix="/threads", tags=["threads"])


@router.get("", response_model=list[ThreadRead], summary="List threads",
            description="Threads owned by the caller, newest first.")
async def list_threads_route(
    session: AsyncSession = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    return await list_threads(session, user_id=current_user.id)


@router.post("", response_model=ThreadRead, status_code=status.HTTP_201_CREATED,
             summary="Create a thread",
             responses={409: {"model": ErrorResponse}, 429: {"model": ErrorResponse}})
async def create_thread_route(
    payload: ThreadCreate,
    session: AsyncSession = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    thread = await create_thread(session, user_id=current_user.id, name=payload.name)
    await session.commit()
    return thread


@router.patch("/{thread_id}", response_model=ThreadRead, summary="Rename a thread",
              responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}})
async def update_thread_route(
    thread_id: uuid.UUID,
    payload: ThreadUpdate,
    session: AsyncSession = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    thread = await update_thread(session, user_id=current_user.id, thread_id=thread_id, name=payload.name)
    await session.commit()
    return thread


@router.delete("/{thread_id}", status_code=status.HTTP_204_NO_CONTENT,
               summary="Delete a thread",
               description="Removes the thread with its transcripts and action points. "
                           "Deleting a missing thread succeeds as well.")
async def delete_thread_route(
    thread_id: uuid.UUID,
    session: AsyncSession = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    await delete_thread(session, user_id=current_user.id, thread_id=thread_id)
    await session.commit()
    return None
