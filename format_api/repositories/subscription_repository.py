from typing import Optional, List

from sqlalchemy import select
from sqlalchemy.engine import RowMapping

from format_api.models.community import Community
from format_api.models.subscription import Subscription
from format_api.models.user import User
from format_api.repositories.base_repository import BaseRepository


class SubscriptionRepository(BaseRepository):
    """Data access for Subscription rows"""

    async def find(self, user_id: int, community_id: int) -> Optional[Subscription]:
        query = select(Subscription).where(
            Subscription.user_id == user_id,
            Subscription.community_id == community_id,
        )
        result = await self.session.execute(query)
        return result.scalars().first()

    async def exists(self, user_id: int, community_id: int) -> bool:
        query = select(Subscription.id).where(
            Subscription.user_id == user_id,
            Subscription.community_id == community_id,
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none() is not None

    async def list_for_user(self, user_id: int) -> List[RowMapping]:
        """Communities a user is subscribed to"""
        query = (
            select(
                Subscription.community_id,
                Community.name.label("community_name"),
                Community.description.label("community_description"),
            )
            .select_from(Subscription)
            .join(Community, Subscription.community_id == Community.id)
            .where(Subscription.user_id == user_id)
            .order_by(Subscription.id)
        )
        result = await self.session.execute(query)
        return list(result.mappings().all())

    async def list_for_community(self, community_id: int) -> List[RowMapping]:
        """Subscribers of a community with their logins"""
        query = (
            select(
                Subscription.id,
                Subscription.user_id,
                User.login.label("user_login"),
            )
            .select_from(Subscription)
            .join(User, Subscription.user_id == User.id)
            .where(Subscription.community_id == community_id)
            .order_by(Subscription.id)
        )
        result = await self.session.execute(query)
        return list(result.mappings().all())

    def add(self, subscription: Subscription) -> None:
        self.session.add(subscription)

    async def delete(self, subscription: Subscription) -> None:
        await self.session.delete(subscription)
