from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint
from format_api.core.database import Base

class Like(Base):
    """
    A user's like on a post, at most one per (user, post)
    """
    __tablename__ = "likes"
    __table_args__ = (
        UniqueConstraint("user_id", "post_id", name="likes_user_id_post_id_key"),
    )

    id: int = Column(
        Integer,
        primary_key=True,
        index=True,
        doc="Like ID"
    )
    user_id: int = Column(
        Integer,
        ForeignKey(
            "users.id",
            ondelete="CASCADE",
            name="likes_user_id_fkey",
        ),
        nullable=False,
        doc="Liking user ID"
    )
    post_id: int = Column(
        Integer,
        ForeignKey(
            "posts.id",
            ondelete="CASCADE",
            name="likes_post_id_fkey",
        ),
        nullable=False,
        index=True,
        doc="Liked post ID"
    )
