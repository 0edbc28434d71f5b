from sqlalchemy import Column, Integer, String
from format_api.core.database import Base

# (id, name) pairs seeded at startup and by the initial migration
ADMIN_ROLE_ID = 1
USER_ROLE_ID = 2
DEFAULT_ROLES = [
    (ADMIN_ROLE_ID, "admin"),
    (USER_ROLE_ID, "user"),
]


class Role(Base):
    """
    User role reference data
    """
    __tablename__ = "roles"

    id: int = Column(
        Integer,
        primary_key=True,
        doc="Role ID"
    )
    name: str = Column(
        String(50),
        unique=True,
        nullable=False,
        doc="Role name"
    )
