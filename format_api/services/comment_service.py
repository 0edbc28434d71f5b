import logging
from typing import List, Optional

from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession

from format_api.models.comment import Comment
from format_api.repositories.comment_repository import CommentRepository
from format_api.repositories.post_repository import PostRepository
from format_api.repositories.user_repository import UserRepository
from format_api.services.authorization import ensure_owner, require_identity
from format_api.utils.exceptions import BadRequestError, NotFoundError

logger = logging.getLogger(__name__)


class CommentService:
    """
    Comment service
    - create on an existing post, owner-only edit and delete
    - listings per post and per user
    """
    def __init__(self, db: AsyncSession):
        self.db = db
        self.comment_repo = CommentRepository(db)
        self.post_repo = PostRepository(db)
        self.user_repo = UserRepository(db)

    async def _get_or_404(self, comment_id: int) -> Comment:
        comment = await self.comment_repo.get_by_id(comment_id)
        if not comment:
            raise NotFoundError("Comment not found.")
        return comment

    async def create_comment(
        self,
        post_id: int,
        actor_id: Optional[int],
        comment_text: str,
    ) -> Comment:
        """
        1) caller identity is required
        2) the parent post must exist
        3) insert and commit
        """
        user_id = require_identity(actor_id)
        if not comment_text or not comment_text.strip():
            raise BadRequestError("Comment text is required.")
        if not await self.post_repo.exists(post_id):
            raise NotFoundError("Post not found.")
        if not await self.user_repo.exists(user_id):
            raise NotFoundError("User not found.")

        comment = Comment(
            post_id=post_id,
            user_id=user_id,
            comment_text=comment_text,
        )
        self.comment_repo.add(comment)
        await self.comment_repo.commit(missing_message="Post or user not found.")
        logger.info("Comment created: id=%s post=%s user=%s", comment.id, post_id, user_id)
        return comment

    async def get_comment(self, comment_id: int) -> RowMapping:
        row = await self.comment_repo.get_detail(comment_id)
        if row is None:
            raise NotFoundError("Comment not found.")
        return row

    async def update_comment(
        self,
        comment_id: int,
        actor_id: Optional[int],
        comment_text: Optional[str] = None,
    ) -> Comment:
        comment = await self._get_or_404(comment_id)
        ensure_owner(actor_id, comment.user_id, "comment")

        if comment_text is not None:
            if not comment_text.strip():
                raise BadRequestError("Comment text cannot be empty.")
            comment.comment_text = comment_text
        await self.comment_repo.commit()
        return comment

    async def delete_comment(self, comment_id: int, actor_id: Optional[int]) -> None:
        comment = await self._get_or_404(comment_id)
        ensure_owner(actor_id, comment.user_id, "comment")

        await self.comment_repo.delete(comment)
        await self.comment_repo.commit()
        logger.info("Comment deleted: id=%s", comment_id)

    async def list_post_comments(self, post_id: int) -> List[RowMapping]:
        if not await self.post_repo.exists(post_id):
            raise NotFoundError("Post not found.")
        return await self.comment_repo.list_for_post(post_id)

    async def list_user_comments(self, user_id: int) -> List[RowMapping]:
        if not await self.user_repo.exists(user_id):
            raise NotFoundError("User not found.")
        return await self.comment_repo.list_for_user(user_id)
