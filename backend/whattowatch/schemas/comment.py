"""Comment Pydantic schemas."""

from pydantic import Field

from whattowatch.schemas.common import BaseSchema


class CreateCommentDto(BaseSchema):
    """Comment body. Film and author come from the route and the identity."""

    text: str = Field(min_length=5, max_length=1024)
    rating: int = Field(ge=1, le=10)
