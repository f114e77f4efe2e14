"""User Pydantic schemas."""

from typing import Optional

from pydantic import Field

from whattowatch.schemas.common import BaseSchema

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class CreateUserDto(BaseSchema):
    """Registration body."""

    email: str = Field(pattern=EMAIL_PATTERN)
    name: str = Field(min_length=1, max_length=15)
    password: str = Field(min_length=6, max_length=12)
    avatar_path: Optional[str] = None


class LoginUserDto(BaseSchema):
    """Login body."""

    email: str = Field(pattern=EMAIL_PATTERN)
    password: str = Field(min_length=6, max_length=12)
