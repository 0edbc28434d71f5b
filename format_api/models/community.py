from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, DateTime, func
from format_api.core.database import Base


class Community(Base):
    """
    Community that posts can be published in and users can subscribe to
    """
    __tablename__ = "communities"

    id: int = Column(
        Integer,
        primary_key=True,
        index=True,
        doc="Community ID"
    )
    name: str = Column(
        String(100),
        unique=True,
        nullable=False,
        doc="Community name"
    )
    description: str = Column(
        Text,
        nullable=True,
        doc="Description"
    )
    avatar_url: str = Column(
        Text,
        nullable=True,
        doc="Avatar image URL"
    )
    created_at: datetime = Column(
        DateTime(timezone=True),
        nullable=True,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        doc="Creation time (UTC)"
    )
    # Stored value only: no write path updates it
    publication_count: int = Column(
        Integer,
        nullable=True,
        default=0,
        server_default="0",
        doc="Publication counter used by the most-popular listing"
    )
