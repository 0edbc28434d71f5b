from datetime import datetime, timezone

from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, func
from format_api.core.database import Base


class Comment(Base):
    """
    Comment on a post
    - removed when either the post or the commenting user is deleted
    """
    __tablename__ = "comments"

    id: int = Column(
        Integer,
        primary_key=True,
        index=True,
        doc="Comment ID"
    )
    comment_text: str = Column(
        Text,
        nullable=False,
        doc="Comment body"
    )
    created_at: datetime = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        doc="Creation time (UTC)"
    )
    post_id: int = Column(
        Integer,
        ForeignKey(
            "posts.id",
            ondelete="CASCADE",
            name="comments_post_id_fkey",
        ),
        nullable=False,
        index=True,
        doc="Commented post ID"
    )
    user_id: int = Column(
        Integer,
        ForeignKey(
            "users.id",
            ondelete="CASCADE",
            name="comments_user_id_fkey",
        ),
        nullable=False,
        index=True,
        doc="Commenting user ID"
    )
