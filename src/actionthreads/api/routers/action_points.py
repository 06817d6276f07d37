import uuid
from typing import Literal
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from actionthreads.api import deps
from actionthreads.models.user import User
from actionthreads.schemas.action_point import ActionPointCreate, ActionPointRead, ActionPointUpdate
from actionthreads.schemas.base import ErrorResponse
from actionthreads.services.action_point import (
    create_action_point,
    delete_action_point,
    list_action_points,
    update_action_point,
)

router = APIRouter(tags=["action-points"])

_NOT_FOUND = {404: {"model": ErrorResponse}}


@router.get("/threads/{thread_id}/action-points", response_model=list[ActionPointRead],
            summary="List action points of a thread", responses=_NOT_FOUND)
async def list_action_points_route(
    thread_id: uuid.UUID,
    completed: Literal["true", "false"] | None = Query(
        None, description="Only completed (`true`) or only open (`false`) items"
    ),
    session: AsyncSession = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    flag = None if completed is None else completed == "true"
    return await list_action_points(session, user_id=current_user.id, thread_id=thread_id, completed=flag)


@router.post("/threads/{thread_id}/action-points", response_model=ActionPointRead,
             status_code=status.HTTP_201_CREATED, summary="Add an action point",
             responses=_NOT_FOUND)
async def create_action_point_route(
    thread_id: uuid.UUID,
    payload: ActionPointCreate,
    session: AsyncSession = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    action_point = await create_action_point(
        session,
        user_id=current_user.id,
        thread_id=thread_id,
        title=payload.title,
        is_completed=payload.is_completed,
    )
    await session.commit()
    return action_point


@router.patch("/action-points/{action_point_id}", response_model=ActionPointRead,
              summary="Edit or toggle an action point", responses=_NOT_FOUND)
async def update_action_point_route(
    action_point_id: uuid.UUID,
    payload: ActionPointUpdate,
    session: AsyncSession = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    action_point = await update_action_point(
        session,
        user_id=current_user.id,
        action_point_id=action_point_id,
        title=payload.title,
        is_completed=payload.is_completed,
    )
    await session.commit()
    return action_point


@router.delete("/action-points/{action_point_id}", status_code=status.HTTP_204_NO_CONTENT,
               summary="Delete an action point", responses=_NOT_FOUND)
async def delete_action_point_route(
    action_point_id: uuid.UUID,
    session: AsyncSession = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    await delete_action_point(session, user_id=current_user.id, action_point_id=action_point_id)
    await session.commit()
    return None
