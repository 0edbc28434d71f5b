from typing import Optional, List

from sqlalchemy import select, func

from format_api.models.community import Community
from format_api.repositories.base_repository import BaseRepository


class CommunityRepository(BaseRepository):
    """Read access for communities"""

    async def list_all(self) -> List[Community]:
        result = await self.session.execute(select(Community).order_by(Community.id))
        return list(result.scalars().all())

    async def get_by_id(self, community_id: int) -> Optional[Community]:
        return await self.session.get(Community, community_id)

    async def find_by_name(self, name: str) -> Optional[Community]:
        result = await self.session.execute(select(Community).where(Community.name == name))
        return result.scalars().first()

    async def exists(self, community_id: int) -> bool:
        query = select(Community.id).where(Community.id == community_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none() is not None

    async def list_most_popular(self, count: int) -> List[Community]:
        """
        Highest publication_count first, a NULL counter ranks as zero
        """
        query = (
            select(Community)
            .order_by(func.coalesce(Community.publication_count, 0).desc(), Community.id)
            .limit(count)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
