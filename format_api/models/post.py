from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from format_api.core.database import Base


class Post(Base):
    """
    Post model
    - author, community and topic references are nulled when the referenced row is deleted
    - comments and likes are deleted together with the post
    """
    __tablename__ = "posts"

    id: int = Column(
        Integer,
        primary_key=True,
        index=True,
        doc="Post ID"
    )
    content: str = Column(
        Text,
        nullable=False,
        doc="Post body"
    )
    media_url: str = Column(
        Text,
        nullable=True,
        doc="Reference of the attached image"
    )
    # NULLs never collide, so only non-null share URLs are unique
    share_url: str = Column(
        String(500),
        unique=True,
        nullable=True,
        doc="Public share URL"
    )
    created_at: datetime = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        index=True,
        doc="Creation time (UTC)"
    )
    author_id: int = Column(
        Integer,
        ForeignKey(
            "users.id",
            ondelete="SET NULL",  # posts outlive their author
            name="posts_author_id_fkey",
        ),
        nullable=True,
        index=True,
        doc="Author user ID"
    )
    community_id: int = Column(
        Integer,
        ForeignKey(
            "communities.id",
            ondelete="SET NULL",
            name="posts_community_id_fkey",
        ),
        nullable=True,
        index=True,
        doc="Community ID"
    )
    topic_id: int = Column(
        Integer,
        ForeignKey(
            "topics.id",
            ondelete="SET NULL",
            name="posts_topic_id_fkey",
        ),
        nullable=True,
        index=True,
        doc="Topic ID"
    )
