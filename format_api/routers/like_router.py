from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from format_api.core.database import get_db_session
from format_api.dependencies import get_current_user_id
from format_api.schemas.like_schema import LikedPostResponse, LikeResponse
from format_api.services.like_service import LikeService

router = APIRouter(tags=["Like"])


@router.get("/users/{user_id}/likes", response_model=List[LikedPostResponse])
async def list_user_likes(
    user_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> List[LikedPostResponse]:
    """
    Posts liked by a user
    """
    rows = await LikeService(db).list_user_likes(user_id)
    return [LikedPostResponse.model_validate(dict(r)) for r in rows]


@router.post(
    "/posts/{post_id}/likes",
    response_model=LikeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_like(
    post_id: int,
    actor_id: Optional[int] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> LikeResponse:
    like = await LikeService(db).add_like(post_id, actor_id)
    return LikeResponse.model_validate(like)


@router.delete("/posts/{post_id}/likes", status_code=status.HTTP_204_NO_CONTENT)
async def remove_like(
    post_id: int,
    actor_id: Optional[int] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> None:
    await LikeService(db).remove_like(post_id, actor_id)
