from typing import Optional, List

from sqlalchemy import select

from format_api.models.topic import Topic
from format_api.repositories.base_repository import BaseRepository


class TopicRepository(BaseRepository):
    """Read access for topics"""

    async def list_all(self) -> List[Topic]:
        result = await self.session.execute(select(Topic).order_by(Topic.id))
        return list(result.scalars().all())

    async def get_by_id(self, topic_id: int) -> Optional[Topic]:
        return await self.session.get(Topic, topic_id)

    async def find_by_name(self, name: str) -> Optional[Topic]:
        result = await self.session.execute(select(Topic).where(Topic.name == name))
        return result.scalars().first()

    async def exists(self, topic_id: int) -> bool:
        result = await self.session.execute(select(Topic.id).where(Topic.id == topic_id))
        return result.scalar_one_or_none() is not None
