from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint
from format_api.core.database import Base

class Subscription(Base):
    """
    A user's subscription to a community, at most one per (user, community)
    """
    __tablename__ = "subscriptions"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "community_id",
            name="subscriptions_user_id_community_id_key",
        ),
    )

    id: int = Column(
        Integer,
        primary_key=True,
        index=True,
        doc="Subscription ID"
    )
    user_id: int = Column(
        Integer,
        ForeignKey(
            "users.id",
            ondelete="CASCADE",
            name="subscriptions_user_id_fkey",
        ),
        nullable=False,
        doc="Subscriber user ID"
    )
    community_id: int = Column(
        Integer,
        ForeignKey(
            "communities.id",
            ondelete="CASCADE",
            name="subscriptions_community_id_fkey",
        ),
        nullable=False,
        index=True,
        doc="Community ID"
    )
