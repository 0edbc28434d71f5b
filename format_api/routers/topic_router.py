from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from format_api.core.database import get_db_session
from format_api.routers.post_router import to_post_response
from format_api.schemas.topic_schema import TopicResponse, TopicWithPostsResponse
from format_api.services.topic_service import TopicService

router = APIRouter(prefix="/topics", tags=["Topic"])


@router.get("", response_model=List[TopicResponse])
async def list_topics(
    db: AsyncSession = Depends(get_db_session),
) -> List[TopicResponse]:
    topics = await TopicService(db).list_topics()
    return [TopicResponse.model_validate(t) for t in topics]


@router.get("/by-name", response_model=TopicResponse)
async def get_by_name(
    name: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db_session),
) -> TopicResponse:
    topic = await TopicService(db).get_topic_by_name(name)
    return TopicResponse.model_validate(topic)


@router.get("/{topic_id}", response_model=TopicResponse)
async def get_topic(
    topic_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> TopicResponse:
    topic = await TopicService(db).get_topic(topic_id)
    return TopicResponse.model_validate(topic)


@router.get("/{topic_id}/with-posts", response_model=TopicWithPostsResponse)
async def get_with_posts(
    topic_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> TopicWithPostsResponse:
    topic, posts = await TopicService(db).get_with_posts(topic_id)
    return TopicWithPostsResponse(
        **TopicResponse.model_validate(topic).model_dump(),
        posts=[to_post_response(p) for p in posts],
    )
