from fastapi import APIRouter, Depends
from actionthreads.api import deps
from actionthreads.models.user import User
from actionthreads.schemas.user import UserRead

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserRead, summary="Get current user")
async def get_current_user_route(current_user: User = Depends(deps.get_current_user)):
    return current_user
