from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from format_api.core.database import get_db_session
from format_api.dependencies import get_current_user_id
from format_api.schemas.subscription_schema import (
    SubscribeRequest,
    SubscriptionResponse,
    UserSubscriptionResponse,
)
from format_api.services.subscription_service import SubscriptionService

router = APIRouter(
    prefix="/users/{user_id}/subscriptions",
    tags=["Subscription"],
)


@router.get("", response_model=List[UserSubscriptionResponse])
async def list_subscriptions(
    user_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> List[UserSubscriptionResponse]:
    rows = await SubscriptionService(db).list_user_subscriptions(user_id)
    return [UserSubscriptionResponse.model_validate(dict(r)) for r in rows]


@router.post(
    "",
    response_model=SubscriptionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def subscribe(
    user_id: int,
    req: SubscribeRequest,
    actor_id: Optional[int] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> SubscriptionResponse:
    """
    Subscribe the path user to a community; only that user may do it
    """
    subscription = await SubscriptionService(db).subscribe(user_id, actor_id, req.community_id)
    return SubscriptionResponse.model_validate(subscription)


@router.delete("/{community_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unsubscribe(
    user_id: int,
    community_id: int,
    actor_id: Optional[int] = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> None:
    await SubscriptionService(db).unsubscribe(user_id, actor_id, community_id)
