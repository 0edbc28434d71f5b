import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession

from format_api.models.post import Post
from format_api.repositories.community_repository import CommunityRepository
from format_api.repositories.post_repository import PostRepository
from format_api.repositories.topic_repository import TopicRepository
from format_api.repositories.user_repository import UserRepository
from format_api.services.authorization import ensure_owner
from format_api.services.media_service import MediaStorage, MediaUpload
from format_api.utils.exceptions import BadRequestError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)

SHARE_URL_TAKEN_MESSAGE = "Share URL is already used by another post."


class PostService:
    """
    Post service
    - creation with an optional image attachment
    - owner-only update and delete
    - denormalized post reads
    """
    def __init__(self, db: AsyncSession, media: Optional[MediaStorage] = None):
        """
        - db: async DB session
        - media: attachment storage, only needed for creation
        """
        self.db = db
        self.media = media
        self.post_repo = PostRepository(db)
        self.user_repo = UserRepository(db)
        self.community_repo = CommunityRepository(db)
        self.topic_repo = TopicRepository(db)

    async def _check_references(
        self,
        community_id: Optional[int],
        topic_id: Optional[int],
    ) -> None:
        if community_id is not None and not await self.community_repo.exists(community_id):
            raise NotFoundError("Community not found.")
        if topic_id is not None and not await self.topic_repo.exists(topic_id):
            raise NotFoundError("Topic not found.")

    async def _share_url_taken(self, share_url: str, post_id: Optional[int] = None) -> bool:
        query = select(Post.id).where(Post.share_url == share_url)
        if post_id is not None:
            query = query.where(Post.id != post_id)
        result = await self.db.execute(query)
        return result.scalars().first() is not None

    async def _detail_or_404(self, post_id: int) -> RowMapping:
        row = await self.post_repo.get_detail(post_id)
        if row is None:
            raise NotFoundError("Post not found.")
        return row

    async def create_post(
        self,
        author_id: int,
        actor_id: Optional[int],
        content: str,
        community_id: Optional[int] = None,
        topic_id: Optional[int] = None,
        share_url: Optional[str] = None,
        attachment: Optional[MediaUpload] = None,
    ) -> RowMapping:
        """
        Create a post on behalf of author_id
        1) author must exist, caller must be the author
        2) content, references, attachment and share URL are validated
        3) the attachment is stored, then the post row is inserted
        Nothing is written when any check fails.
        """
        # 1) Author and ownership
        if not await self.user_repo.exists(author_id):
            raise NotFoundError("User not found.")
        ensure_owner(actor_id, author_id, "post")

        # 2) Validation
        if not content or not content.strip():
            raise BadRequestError("Post content is required.")
        await self._check_references(community_id, topic_id)
        if attachment is not None and attachment.size > 0:
            if self.media is None:
                raise BadRequestError("Attachments are not accepted here.")
            self.media.validate(attachment)
        else:
            attachment = None
        if share_url and await self._share_url_taken(share_url):
            raise ConflictError(SHARE_URL_TAKEN_MESSAGE)

        # 3) Store attachment, insert post
        media_url = await self.media.save(attachment) if attachment else None
        post = Post(
            content=content,
            media_url=media_url,
            share_url=share_url or None,
            author_id=author_id,
            community_id=community_id,
            topic_id=topic_id,
        )
        self.post_repo.add(post)
        try:
            await self.post_repo.commit(SHARE_URL_TAKEN_MESSAGE, "User, community or topic not found.")
        except Exception:
            # The row was not written, so the stored file is orphaned
            if media_url:
                await self.media.delete(media_url)
            raise

        logger.info("Post created: id=%s author=%s media=%s", post.id, author_id, bool(media_url))
        return await self._detail_or_404(post.id)

    async def get_post(self, post_id: int) -> RowMapping:
        return await self._detail_or_404(post_id)

    async def list_posts(
        self,
        community_id: Optional[int] = None,
        topic_id: Optional[int] = None,
        author_id: Optional[int] = None,
    ) -> List[RowMapping]:
        return await self.post_repo.list_details(community_id, topic_id, author_id)

    async def list_user_posts(self, user_id: int) -> List[RowMapping]:
        if not await self.user_repo.exists(user_id):
            raise NotFoundError("User not found.")
        return await self.post_repo.list_details(author_id=user_id)

    async def update_post(
        self,
        post_id: int,
        actor_id: Optional[int],
        content: Optional[str] = None,
        media_url: Optional[str] = None,
        community_id: Optional[int] = None,
        topic_id: Optional[int] = None,
        share_url: Optional[str] = None,
    ) -> RowMapping:
        """
        Owner-only update; omitted fields keep their value
        and an empty share URL clears it
        """
        post = await self.post_repo.get_by_id(post_id)
        if not post:
            raise NotFoundError("Post not found.")
        ensure_owner(actor_id, post.author_id, "post")

        if content is not None and not content.strip():
            raise BadRequestError("Post content cannot be empty.")
        await self._check_references(community_id, topic_id)
        if share_url and await self._share_url_taken(share_url, post_id):
            raise ConflictError(SHARE_URL_TAKEN_MESSAGE)

        if content is not None:
            post.content = content
        if media_url is not None:
            post.media_url = media_url
        if community_id is not None:
            post.community_id = community_id
        if topic_id is not None:
            post.topic_id = topic_id
        if share_url is not None:
            post.share_url = share_url or None

        await self.post_repo.commit(SHARE_URL_TAKEN_MESSAGE, "Community or topic not found.")
        logger.info("Post updated: id=%s", post_id)
        return await self._detail_or_404(post_id)

    async def delete_post(self, post_id: int, actor_id: Optional[int]) -> None:
        """
        Owner-only delete; comments and likes go with the post
        """
        post = await self.post_repo.get_by_id(post_id)
        if not post:
            raise NotFoundError("Post not found.")
        ensure_owner(actor_id, post.author_id, "post")

        await self.post_repo.delete(post)
        await self.post_repo.commit()
        logger.info("Post deleted: id=%s", post_id)
