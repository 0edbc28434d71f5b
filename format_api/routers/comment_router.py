from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from format_api.core.database import get_db_session
from format_api.dependencies import get_current_user_id
from format_api.schemas.comment_schema import (
    CommentCreateRequest,
    CommentResponse,
    CommentUpdateRequest,
    PostCommentResponse,
    UserCommentResponse,
)
from format_api.services.comment_service import CommentService

router = APIRouter(tags=["Comment"])


@router.get("/users/{user_id}/comments", response_model=List[UserCommentResponse])
async def list_user_comments(
    user_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> List[UserCommentResponse]:
    """
    Comments written by a user, each with its post's content and author
    """
    rows = await CommentService(db).list_user_comments(user_id)
    return [UserCommentResponse.model_validate(dict(r)) for r in rows]


@router.get("/posts/{post_id}/comments", response_model=List[PostCommentResponse])
async def list_post_comments(
    post_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> List[PostCommentResponse]:
    """
    Comments of a post with commenter login and avatar, newest first
    """
    rows = await CommentService(db).list_post_comments(post_id)
    return [PostCommentResponse.model_validate(dict(r)) for r in rows]


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: int,
    req: CommentCreateRequest,
    actor_id: Optional[int] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> CommentResponse:
    comment = await CommentService(db).create_comment(post_id, actor_id, req.comment_text)
    return CommentResponse.model_validate(comment)


@router.get("/comments/{comment_id}", response_model=PostCommentResponse)
async def get_comment(
    comment_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> PostCommentResponse:
    row = await CommentService(db).get_comment(comment_id)
    return PostCommentResponse.model_validate(dict(row))


@router.put("/comments/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: int,
    req: CommentUpdateRequest,
    actor_id: Optional[int] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> CommentResponse:
    """
    Author-only edit
    """
    comment = await CommentService(db).update_comment(comment_id, actor_id, req.comment_text)
    return CommentResponse.model_validate(comment)


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: int,
    actor_id: Optional[int] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> None:
    await CommentService(db).delete_comment(comment_id, actor_id)
