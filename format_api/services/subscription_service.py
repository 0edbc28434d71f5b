import logging
from typing import List, Optional

from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession

from format_api.models.subscription import Subscription
from format_api.repositories.community_repository import CommunityRepository
from format_api.repositories.subscription_repository import SubscriptionRepository
from format_api.repositories.user_repository import UserRepository
from format_api.services.authorization import ensure_owner
from format_api.utils.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)

ALREADY_SUBSCRIBED_MESSAGE = "Already subscribed to this community."


class SubscriptionService:
    """
    Subscription service
    - the user id in the path owns the subscription, the caller must match it
    """
    def __init__(self, db: AsyncSession):
        self.db = db
        self.subscription_repo = SubscriptionRepository(db)
        self.community_repo = CommunityRepository(db)
        self.user_repo = UserRepository(db)

    async def subscribe(
        self,
        user_id: int,
        actor_id: Optional[int],
        community_id: int,
    ) -> Subscription:
        """
        1) user must exist, caller must be that user
        2) community must exist, subscription must not
        3) insert; a concurrent duplicate fails on the unique constraint
        """
        if not await self.user_repo.exists(user_id):
            raise NotFoundError("User not found.")
        ensure_owner(actor_id, user_id, "subscription")
        if not await self.community_repo.exists(community_id):
            raise NotFoundError("Community not found.")
        if await self.subscription_repo.exists(user_id, community_id):
            raise ConflictError(ALREADY_SUBSCRIBED_MESSAGE)

        subscription = Subscription(user_id=user_id, community_id=community_id)
        self.subscription_repo.add(subscription)
        await self.subscription_repo.commit(ALREADY_SUBSCRIBED_MESSAGE, "Community or user not found.")
        logger.info("Subscribed: user=%s community=%s", user_id, community_id)
        return subscription

    async def unsubscribe(
        self,
        user_id: int,
        actor_id: Optional[int],
        community_id: int,
    ) -> None:
        ensure_owner(actor_id, user_id, "subscription")
        subscription = await self.subscription_repo.find(user_id, community_id)
        if not subscription:
            raise NotFoundError("Subscription not found.")

        await self.subscription_repo.delete(subscription)
        await self.subscription_repo.commit()
        logger.info("Unsubscribed: user=%s community=%s", user_id, community_id)

    async def list_user_subscriptions(self, user_id: int) -> List[RowMapping]:
        if not await self.user_repo.exists(user_id):
            raise NotFoundError("User not found.")
        return await self.subscription_repo.list_for_user(user_id)
