from sqlalchemy import Column, Integer, String, Text
from format_api.core.database import Base


class Topic(Base):
    """
    Topic tag for posts
    """
    __tablename__ = "topics"

    id: int = Column(
        Integer,
        primary_key=True,
        index=True,
        doc="Topic ID"
    )
    name: str = Column(
        String(100),
        nullable=False,
        doc="Topic name"
    )
    icon_url: str = Column(
        Text,
        nullable=True,
        doc="Icon image URL"
    )
