"""Request body schemas (DTOs)."""

from whattowatch.schemas.comment import CreateCommentDto
from whattowatch.schemas.common import BaseSchema
from whattowatch.schemas.film import CreateFilmDto, UpdateFilmDto
from whattowatch.schemas.user import CreateUserDto, LoginUserDto

__all__ = [
    "BaseSchema",
    "CreateCommentDto",
    "CreateFilmDto",
    "CreateUserDto",
    "LoginUserDto",
    "UpdateFilmDto",
]
