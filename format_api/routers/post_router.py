from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from format_api.core.database import get_db_session
from format_api.dependencies import get_current_user_id, get_post_service
from format_api.schemas.post_schema import (
    CommunitySummary,
    PostResponse,
    PostUpdateRequest,
    TopicSummary,
)
from format_api.services.media_service import MediaUpload
from format_api.services.post_service import PostService

router = APIRouter(tags=["Post"])


def to_post_response(row: RowMapping) -> PostResponse:
    """
    Convert a post projection row into PostResponse
    """
    community = (
        CommunitySummary(id=row["community_id"], name=row["community_name"])
        if row["community_id"] is not None and row["community_name"] is not None
        else None
    )
    topic = (
        TopicSummary(id=row["topic_id"], name=row["topic_name"])
        if row["topic_id"] is not None and row["topic_name"] is not None
        else None
    )
    return PostResponse(
        id=row["id"],
        content=row["content"],
        media_url=row["media_url"],
        share_url=row["share_url"],
        created_at=row["created_at"],
        author_id=row["author_id"],
        community=community,
        topic=topic,
        comments_count=row["comments_count"] or 0,
        likes_count=row["likes_count"] or 0,
    )


@router.get("/users/{user_id}/posts", response_model=List[PostResponse])
async def list_user_posts(
    user_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> List[PostResponse]:
    """
    Posts written by a user, newest first
    """
    rows = await PostService(db).list_user_posts(user_id)
    return [to_post_response(r) for r in rows]


@router.post(
    "/users/{user_id}/posts",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_post(
    user_id: int,
    content: str = Form(..., min_length=1),
    image_file: Optional[UploadFile] = File(None),
    community_id: Optional[int] = Form(None),
    topic_id: Optional[int] = Form(None),
    share_url: Optional[str] = Form(None),
    actor_id: Optional[int] = Depends(get_current_user_id),
    post_service: PostService = Depends(get_post_service),
) -> PostResponse:
    """
    Create a post (multipart form)
    - the caller must be the user in the path
    - optional image: jpg, jpeg, png or gif, at most 5MB
    """
    attachment = None
    if image_file is not None and image_file.filename:
        # One byte past the limit is enough for the size check to reject it
        attachment = MediaUpload(
            filename=image_file.filename,
            content=await image_file.read(post_service.media.max_bytes + 1),
        )

    row = await post_service.create_post(
        author_id=user_id,
        actor_id=actor_id,
        content=content,
        community_id=community_id,
        topic_id=topic_id,
        share_url=share_url,
        attachment=attachment,
    )
    return to_post_response(row)


@router.get("/posts", response_model=List[PostResponse])
async def list_posts(
    community_id: Optional[int] = Query(None),
    topic_id: Optional[int] = Query(None),
    author_id: Optional[int] = Query(None),
    db: AsyncSession = Depends(get_db_session),
) -> List[PostResponse]:
    """
    All posts, optionally filtered by community, topic and author; newest first
    """
    rows = await PostService(db).list_posts(community_id, topic_id, author_id)
    return [to_post_response(r) for r in rows]


@router.get("/posts/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    row = await PostService(db).get_post(post_id)
    return to_post_response(row)


@router.put("/posts/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: int,
    req: PostUpdateRequest,
    actor_id: Optional[int] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    """
    Author-only edit; omitted fields are kept
    """
    row = await PostService(db).update_post(
        post_id,
        actor_id,
        **req.model_dump(exclude_unset=True),
    )
    return to_post_response(row)


@router.delete("/posts/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: int,
    actor_id: Optional[int] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> None:
    """
    Author-only delete; comments and likes of the post go with it
    """
    await PostService(db).delete_post(post_id, actor_id)
