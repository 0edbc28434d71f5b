import logging
from typing import List, Optional

from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession

from format_api.models.like import Like
from format_api.repositories.like_repository import LikeRepository
from format_api.repositories.post_repository import PostRepository
from format_api.repositories.user_repository import UserRepository
from format_api.services.authorization import require_identity
from format_api.utils.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)

LIKE_EXISTS_MESSAGE = "Like already exists."


class LikeService:
    """
    Like service: at most one like per (user, post)
    """
    def __init__(self, db: AsyncSession):
        self.db = db
        self.like_repo = LikeRepository(db)
        self.post_repo = PostRepository(db)
        self.user_repo = UserRepository(db)

    async def add_like(self, post_id: int, actor_id: Optional[int]) -> Like:
        """
        1) caller identity is required
        2) post must exist, like must not
        3) insert; a concurrent duplicate fails on the unique constraint
        """
        user_id = require_identity(actor_id)
        if not await self.post_repo.exists(post_id):
            raise NotFoundError("Post not found.")
        if not await self.user_repo.exists(user_id):
            raise NotFoundError("User not found.")
        if await self.like_repo.exists(user_id, post_id):
            raise ConflictError(LIKE_EXISTS_MESSAGE)

        like = Like(user_id=user_id, post_id=post_id)
        self.like_repo.add(like)
        await self.like_repo.commit(LIKE_EXISTS_MESSAGE, "Post or user not found.")
        logger.info("Like added: post=%s user=%s", post_id, user_id)
        return like

    async def remove_like(self, post_id: int, actor_id: Optional[int]) -> None:
        user_id = require_identity(actor_id)
        like = await self.like_repo.find(user_id, post_id)
        if not like:
            raise NotFoundError("Like not found.")

        await self.like_repo.delete(like)
        await self.like_repo.commit()
        logger.info("Like removed: post=%s user=%s", post_id, user_id)

    async def list_user_likes(self, user_id: int) -> List[RowMapping]:
        if not await self.user_repo.exists(user_id):
            raise NotFoundError("User not found.")
        return await self.like_repo.list_for_user(user_id)
