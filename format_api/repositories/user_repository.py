from typing import Optional
from sqlalchemy import select, or_

from format_api.models.user import User
from format_api.repositories.base_repository import BaseRepository

class UserRepository(BaseRepository):
    """
    Data access for User rows
    """

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """
        Return the user with the given id, or None
        """
        return await self.session.get(User, user_id)

    async def exists(self, user_id: int) -> bool:
        query = select(User.id).where(User.id == user_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none() is not None

    async def exists_by_login_or_email(self, login: str, email: str) -> bool:
        """
        Single OR lookup: a login collision and an email collision look the same
        """
        query = select(User.id).where(
            or_(User.login == login, User.email == email)
        ).limit(1)
        result = await self.session.execute(query)
        return result.scalar_one_or_none() is not None

    async def find_by_login(self, login: str) -> Optional[User]:
        query = select(User).where(User.login == login)
        result = await self.session.execute(query)
        return result.scalars().first()

    async def email_taken_by_other(self, email: str, user_id: int) -> bool:
        """
        True when another user already uses this email
        """
        query = select(User.id).where(User.email == email, User.id != user_id)
        result = await self.session.execute(query)
        return result.scalars().first() is not None

    def add(self, user: User) -> None:
        self.session.add(user)

    async def delete(self, user: User) -> None:
        """
        Delete the user; dependent rows follow the FK ON DELETE rules
        """
        await self.session.delete(user)
