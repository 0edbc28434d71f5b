import logging
from typing import Optional

from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from format_api.core.config import settings
from format_api.models.user import User
from format_api.repositories.user_repository import UserRepository
from format_api.utils.exceptions import (
    BadRequestError, ConflictError, NotFoundError, UnauthorizedError
)

logger = logging.getLogger(__name__)
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

DUPLICATE_USER_MESSAGE = "User with this login or email already exists"


class UserService:
    """
    User account service
    - registration, login, profile and password updates, deletion
    """
    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_repo = UserRepository(db)

    async def _get_or_404(self, user_id: int) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found.")
        return user

    async def register(
        self,
        login: str,
        email: str,
        password: str,
        phone: Optional[str] = None,
    ) -> User:
        # 1) Duplicate check, login and email in one query
        if await self.user_repo.exists_by_login_or_email(login, email):
            raise ConflictError(DUPLICATE_USER_MESSAGE)

        # 2) Create the user with the default role
        user = User(
            login=login,
            email=email,
            password=pwd_context.hash(password),
            phone=phone,
            role_id=settings.DEFAULT_ROLE_ID,
        )
        self.user_repo.add(user)

        # 3) Commit; a concurrent registration loses on the unique constraint
        await self.user_repo.commit(DUPLICATE_USER_MESSAGE)
        logger.info("User registered: id=%s login=%s", user.id, user.login)
        return user

    async def login(self, login: str, password: str) -> User:
        """
        Check login/password and return the user
        """
        user = await self.user_repo.find_by_login(login)
        if not user or not pwd_context.verify(password, user.password):
            raise UnauthorizedError("Invalid login or password")
        return user

    async def get_user(self, user_id: int) -> User:
        return await self._get_or_404(user_id)

    async def update_user(
        self,
        user_id: int,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        avatar_url: Optional[str] = None,
        password: Optional[str] = None,
    ) -> User:
        """
        Update profile fields; omitted fields keep their value
        """
        user = await self._get_or_404(user_id)

        if email and email != user.email:
            if await self.user_repo.email_taken_by_other(email, user_id):
                raise ConflictError("Email is already in use")
            user.email = email
        if phone is not None:
            user.phone = phone
        if avatar_url is not None:
            user.avatar_url = avatar_url
        if password:
            user.password = pwd_context.hash(password)

        await self.user_repo.commit("Email is already in use")
        return user

    async def change_password(self, user_id: int, old_password: str, new_password: str) -> None:
        user = await self._get_or_404(user_id)
        if not pwd_context.verify(old_password, user.password):
            raise BadRequestError("Old password is incorrect.")
        user.password = pwd_context.hash(new_password)
        await self.user_repo.commit()

    async def delete_user(self, user_id: int) -> None:
        """
        Delete a user
        - comments, likes and subscriptions are removed by the store
        - posts stay with author_id = NULL
        """
        user = await self._get_or_404(user_id)
        await self.user_repo.delete(user)
        await self.user_repo.commit()
        logger.info("User deleted: id=%s", user_id)
