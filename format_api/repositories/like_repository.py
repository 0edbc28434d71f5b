from typing import Optional, List

from sqlalchemy import select
from sqlalchemy.engine import RowMapping

from format_api.models.like import Like
from format_api.models.post import Post
from format_api.models.user import User
from format_api.repositories.base_repository import BaseRepository


class LikeRepository(BaseRepository):
    """Data access for Like rows"""

    async def find(self, user_id: int, post_id: int) -> Optional[Like]:
        query = select(Like).where(Like.user_id == user_id, Like.post_id == post_id)
        result = await self.session.execute(query)
        return result.scalars().first()

    async def exists(self, user_id: int, post_id: int) -> bool:
        query = select(Like.id).where(Like.user_id == user_id, Like.post_id == post_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none() is not None

    async def list_for_user(self, user_id: int) -> List[RowMapping]:
        """
        Posts liked by a user, with content, author, media and creation time
        """
        query = (
            select(
                Like.post_id,
                Post.content,
                Post.author_id,
                User.login.label("author_login"),
                Post.media_url,
                Post.created_at,
            )
            .select_from(Like)
            .join(Post, Like.post_id == Post.id)
            .outerjoin(User, Post.author_id == User.id)
            .where(Like.user_id == user_id)
            .order_by(Like.id)
        )
        result = await self.session.execute(query)
        return list(result.mappings().all())

    def add(self, like: Like) -> None:
        self.session.add(like)

    async def delete(self, like: Like) -> None:
        await self.session.delete(like)
