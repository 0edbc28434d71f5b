from typing import List, Tuple

from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession

from format_api.models.topic import Topic
from format_api.repositories.post_repository import PostRepository
from format_api.repositories.topic_repository import TopicRepository
from format_api.utils.exceptions import NotFoundError


class TopicService:
    """Read-only topic views"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.topic_repo = TopicRepository(db)
        self.post_repo = PostRepository(db)

    async def list_topics(self) -> List[Topic]:
        return await self.topic_repo.list_all()

    async def get_topic(self, topic_id: int) -> Topic:
        topic = await self.topic_repo.get_by_id(topic_id)
        if not topic:
            raise NotFoundError("Topic not found.")
        return topic

    async def get_topic_by_name(self, name: str) -> Topic:
        topic = await self.topic_repo.find_by_name(name)
        if not topic:
            raise NotFoundError("Topic not found.")
        return topic

    async def get_with_posts(self, topic_id: int) -> Tuple[Topic, List[RowMapping]]:
        topic = await self.get_topic(topic_id)
        posts = await self.post_repo.list_details(topic_id=topic_id)
        return topic, posts
