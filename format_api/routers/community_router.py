from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from format_api.core.database import get_db_session
from format_api.routers.post_router import to_post_response
from format_api.schemas.community_schema import (
    CommunityResponse,
    CommunityWithPostsResponse,
    CommunityWithSubscriptionsResponse,
)
from format_api.schemas.subscription_schema import SubscriberResponse
from format_api.services.community_service import CommunityService, DEFAULT_POPULAR_COUNT

router = APIRouter(prefix="/communities", tags=["Community"])


@router.get("", response_model=List[CommunityResponse])
async def list_communities(
    db: AsyncSession = Depends(get_db_session),
) -> List[CommunityResponse]:
    communities = await CommunityService(db).list_communities()
    return [CommunityResponse.model_validate(c) for c in communities]


@router.get("/most-popular", response_model=List[CommunityResponse])
async def most_popular(
    count: int = Query(DEFAULT_POPULAR_COUNT, ge=1),
    db: AsyncSession = Depends(get_db_session),
) -> List[CommunityResponse]:
    """
    Communities ordered by publication count, highest first
    """
    communities = await CommunityService(db).list_most_popular(count)
    return [CommunityResponse.model_validate(c) for c in communities]


@router.get("/by-name", response_model=CommunityResponse)
async def get_by_name(
    name: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db_session),
) -> CommunityResponse:
    community = await CommunityService(db).get_community_by_name(name)
    return CommunityResponse.model_validate(community)


@router.get("/{community_id}", response_model=CommunityResponse)
async def get_community(
    community_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> CommunityResponse:
    community = await CommunityService(db).get_community(community_id)
    return CommunityResponse.model_validate(community)


@router.get("/{community_id}/with-posts", response_model=CommunityWithPostsResponse)
async def get_with_posts(
    community_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> CommunityWithPostsResponse:
    community, posts = await CommunityService(db).get_with_posts(community_id)
    return CommunityWithPostsResponse(
        **CommunityResponse.model_validate(community).model_dump(),
        posts=[to_post_response(p) for p in posts],
    )


@router.get(
    "/{community_id}/with-subscriptions",
    response_model=CommunityWithSubscriptionsResponse,
)
async def get_with_subscriptions(
    community_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> CommunityWithSubscriptionsResponse:
    community, subscribers = await CommunityService(db).get_with_subscriptions(community_id)
    return CommunityWithSubscriptionsResponse(
        **CommunityResponse.model_validate(community).model_dump(),
        subscriptions=[SubscriberResponse.model_validate(dict(s)) for s in subscribers],
    )
