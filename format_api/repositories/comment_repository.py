from typing import Optional, List

from sqlalchemy import select
from sqlalchemy.engine import RowMapping
from sqlalchemy.orm import aliased

from format_api.models.comment import Comment
from format_api.models.post import Post
from format_api.models.user import User
from format_api.repositories.base_repository import BaseRepository


class CommentRepository(BaseRepository):
    """
    Data access for Comment rows
    - listings join the commenting user or the parent post as needed
    """

    async def get_by_id(self, comment_id: int) -> Optional[Comment]:
        return await self.session.get(Comment, comment_id)

    async def get_detail(self, comment_id: int) -> Optional[RowMapping]:
        """
        Comment with its author's login and avatar
        """
        query = (
            select(
                Comment.id,
                Comment.comment_text,
                Comment.created_at,
                Comment.post_id,
                Comment.user_id,
                User.login.label("user_login"),
                User.avatar_url.label("user_avatar_url"),
            )
            .select_from(Comment)
            .outerjoin(User, Comment.user_id == User.id)
            .where(Comment.id == comment_id)
        )
        result = await self.session.execute(query)
        return result.mappings().first()

    async def list_for_post(self, post_id: int) -> List[RowMapping]:
        """
        Comments of a post with each commenter's login and avatar, newest first
        """
        query = (
            select(
                Comment.id,
                Comment.comment_text,
                Comment.created_at,
                Comment.post_id,
                Comment.user_id,
                User.login.label("user_login"),
                User.avatar_url.label("user_avatar_url"),
            )
            .select_from(Comment)
            .outerjoin(User, Comment.user_id == User.id)
            .where(Comment.post_id == post_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
        )
        result = await self.session.execute(query)
        return list(result.mappings().all())

    async def list_for_user(self, user_id: int) -> List[RowMapping]:
        """
        Comments written by a user with the parent post's content and author
        """
        author = aliased(User)
        query = (
            select(
                Comment.id,
                Comment.comment_text,
                Comment.created_at,
                Comment.post_id,
                Post.content.label("post_content"),
                Post.author_id.label("post_author_id"),
                author.login.label("post_author_login"),
            )
            .select_from(Comment)
            .join(Post, Comment.post_id == Post.id)
            .outerjoin(author, Post.author_id == author.id)
            .where(Comment.user_id == user_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
        )
        result = await self.session.execute(query)
        return list(result.mappings().all())

    def add(self, comment: Comment) -> None:
        self.session.add(comment)

    async def delete(self, comment: Comment) -> None:
        await self.session.delete(comment)
