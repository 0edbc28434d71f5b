from typing import List, Tuple

from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession

from format_api.models.community import Community
from format_api.repositories.community_repository import CommunityRepository
from format_api.repositories.post_repository import PostRepository
from format_api.repositories.subscription_repository import SubscriptionRepository
from format_api.utils.exceptions import NotFoundError

DEFAULT_POPULAR_COUNT = 5


class CommunityService:
    """
    Read-only community views
    """
    def __init__(self, db: AsyncSession):
        self.db = db
        self.community_repo = CommunityRepository(db)
        self.post_repo = PostRepository(db)
        self.subscription_repo = SubscriptionRepository(db)

    async def list_communities(self) -> List[Community]:
        return await self.community_repo.list_all()

    async def get_community(self, community_id: int) -> Community:
        community = await self.community_repo.get_by_id(community_id)
        if not community:
            raise NotFoundError("Community not found.")
        return community

    async def get_community_by_name(self, name: str) -> Community:
        community = await self.community_repo.find_by_name(name)
        if not community:
            raise NotFoundError("Community not found.")
        return community

    async def get_with_posts(self, community_id: int) -> Tuple[Community, List[RowMapping]]:
        """Community plus its posts, read in the request's transaction"""
        community = await self.get_community(community_id)
        posts = await self.post_repo.list_details(community_id=community_id)
        return community, posts

    async def get_with_subscriptions(self, community_id: int) -> Tuple[Community, List[RowMapping]]:
        """Community plus its subscriber list"""
        community = await self.get_community(community_id)
        subscribers = await self.subscription_repo.list_for_community(community_id)
        return community, subscribers

    async def list_most_popular(self, count: int = DEFAULT_POPULAR_COUNT) -> List[Community]:
        return await self.community_repo.list_most_popular(count)
