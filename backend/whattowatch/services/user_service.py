"""User registration and lookup service."""

import logging
from typing import Optional

from beanie import PydanticObjectId

from whattowatch.models import User
from whattowatch.schemas import CreateUserDto, LoginUserDto
from whattowatch.security import hash_password, verify_password

logger = logging.getLogger(__name__)


class UserService:
    """
    CRUD facade over the 'users' collection.
    """

    def __init__(self, salt: str):
        self.salt = salt

    async def create(self, dto: CreateUserDto) -> User:
        user = User(
            email=dto.email,
            name=dto.name,
            avatar_path=dto.avatar_path,
            password_hash=hash_password(dto.password, self.salt),
        )
        await user.insert()
        logger.info(f"New user created: {user.email}")
        return user

    async def find_by_email(self, email: str) -> Optional[User]:
        return await User.find_one(User.email == email)

    async def find_by_id(self, user_id: str) -> Optional[User]:
        return await User.get(PydanticObjectId(user_id))

    async def verify(self, dto: LoginUserDto) -> Optional[User]:
        """
        Check login credentials.

        Returns the user when the password matches, None otherwise.
        """
        user = await self.find_by_email(dto.email)
        if not user:
            return None
        if not verify_password(dto.password, self.salt, user.password_hash):
            return None
        return user
