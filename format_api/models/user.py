from sqlalchemy import Column, Integer, String, Text, ForeignKey
from format_api.core.database import Base

class User(Base):
    """
    Registered user
    - deleting a user removes their comments, likes and subscriptions
      and leaves their posts behind with author_id = NULL
    """
    __tablename__ = "users"

    id: int = Column(
        Integer,
        primary_key=True,
        index=True,
        doc="User ID"
    )
    login: str = Column(
        String(50),
        unique=True,
        nullable=False,
        doc="Login name"
    )
    email: str = Column(
        String(100),
        unique=True,
        nullable=False,
        doc="E-mail address"
    )
    password: str = Column(
        Text,
        nullable=False,
        doc="Password hash"
    )
    phone: str = Column(
        String(20),
        nullable=True,
        doc="Phone number"
    )
    avatar_url: str = Column(
        String(500),
        nullable=True,
        doc="Avatar image URL"
    )
    role_id: int = Column(
        Integer,
        ForeignKey("roles.id", name="users_role_id_fkey"),
        nullable=True,
        doc="Role ID"
    )
