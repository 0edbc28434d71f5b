import logging
from typing import Optional, List

from sqlalchemy import select, func
from sqlalchemy.engine import RowMapping
from sqlalchemy.exc import SQLAlchemyError

from format_api.models.comment import Comment
from format_api.models.community import Community
from format_api.models.like import Like
from format_api.models.post import Post
from format_api.models.topic import Topic
from format_api.repositories.base_repository import BaseRepository
from format_api.repositories.exceptions import QueryExecutionError

logger = logging.getLogger(__name__)


# ==================== Query builder ====================
class PostQueryBuilder:
    """Builds the denormalized post projection"""

    @staticmethod
    def comments_count():
        return (
            select(func.count(Comment.id))
            .where(Comment.post_id == Post.id)
            .correlate(Post)
            .scalar_subquery()
        )

    @staticmethod
    def likes_count():
        return (
            select(func.count(Like.id))
            .where(Like.post_id == Post.id)
            .correlate(Post)
            .scalar_subquery()
        )

    @staticmethod
    def base_projection():
        """
        Post columns, community/topic summaries and read-time counts in one statement
        """
        return (
            select(
                Post.id,
                Post.content,
                Post.media_url,
                Post.share_url,
                Post.created_at,
                Post.author_id,
                Post.community_id,
                Community.name.label("community_name"),
                Post.topic_id,
                Topic.name.label("topic_name"),
                PostQueryBuilder.comments_count().label("comments_count"),
                PostQueryBuilder.likes_count().label("likes_count"),
            )
            .select_from(Post)
            .outerjoin(Community, Post.community_id == Community.id)
            .outerjoin(Topic, Post.topic_id == Topic.id)
        )

    @staticmethod
    def build_filtered_query(
            community_id: Optional[int] = None,
            topic_id: Optional[int] = None,
            author_id: Optional[int] = None,
    ):
        """Omitted filters are unconstrained; newest first"""
        query = PostQueryBuilder.base_projection()
        if community_id is not None:
            query = query.where(Post.community_id == community_id)
        if topic_id is not None:
            query = query.where(Post.topic_id == topic_id)
        if author_id is not None:
            query = query.where(Post.author_id == author_id)
        return query.order_by(Post.created_at.desc(), Post.id.desc())


# ==================== Repository ====================
class PostRepository(BaseRepository):
    """Data access for Post rows and post projections"""

    async def get_by_id(self, post_id: int) -> Optional[Post]:
        return await self.session.get(Post, post_id)

    async def exists(self, post_id: int) -> bool:
        result = await self.session.execute(select(Post.id).where(Post.id == post_id))
        return result.scalar_one_or_none() is not None

    async def get_detail(self, post_id: int) -> Optional[RowMapping]:
        """Projection of a single post"""
        query = PostQueryBuilder.base_projection().where(Post.id == post_id)
        try:
            result = await self.session.execute(query)
            return result.mappings().first()
        except SQLAlchemyError as e:
            logger.error("Post detail query failed (post_id=%s): %s", post_id, e)
            raise QueryExecutionError(f"Error while loading post: {e}")

    async def list_details(
            self,
            community_id: Optional[int] = None,
            topic_id: Optional[int] = None,
            author_id: Optional[int] = None,
    ) -> List[RowMapping]:
        """Projection of every post matching the filters"""
        query = PostQueryBuilder.build_filtered_query(community_id, topic_id, author_id)
        try:
            result = await self.session.execute(query)
            rows = list(result.mappings().all())
            logger.debug(
                "Post listing: community=%s topic=%s author=%s found=%d",
                community_id, topic_id, author_id, len(rows),
            )
            return rows
        except SQLAlchemyError as e:
            logger.error("Post listing query failed: %s", e)
            raise QueryExecutionError(f"Error while listing posts: {e}")

    def add(self, post: Post) -> None:
        self.session.add(post)

    async def delete(self, post: Post) -> None:
        await self.session.delete(post)
