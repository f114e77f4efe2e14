"""Film Pydantic schemas."""

from typing import List, Optional

from pydantic import Field, field_validator

from whattowatch.models.film import Genre
from whattowatch.schemas.common import BaseSchema

MIN_RELEASE_YEAR = 1895
MAX_RELEASE_YEAR = 2100


class CreateFilmDto(BaseSchema):
    """Film creation body. The author comes from the authenticated identity."""

    name: str = Field(min_length=2, max_length=100)
    description: str = Field(min_length=20, max_length=1024)
    genre: Genre
    released: int = Field(ge=MIN_RELEASE_YEAR, le=MAX_RELEASE_YEAR)
    preview_video_link: str = Field(min_length=1)
    video_link: str = Field(min_length=1)
    actors: List[str] = Field(min_length=1)
    producer: str = Field(min_length=2, max_length=50)
    run_time: int = Field(gt=0)
    poster_image: str = Field(min_length=1)
    background_image: str = Field(min_length=1)
    color: str = Field(min_length=1)


class UpdateFilmDto(BaseSchema):
    """Partial film update body; only keys present in the request are applied."""

    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, min_length=20, max_length=1024)
    genre: Optional[Genre] = None
    released: Optional[int] = Field(default=None, ge=MIN_RELEASE_YEAR, le=MAX_RELEASE_YEAR)
    preview_video_link: Optional[str] = Field(default=None, min_length=1)
    video_link: Optional[str] = Field(default=None, min_length=1)
    actors: Optional[List[str]] = Field(default=None, min_length=1)
    producer: Optional[str] = Field(default=None, min_length=2, max_length=50)
    run_time: Optional[int] = Field(default=None, gt=0)
    poster_image: Optional[str] = Field(default=None, min_length=1)
    background_image: Optional[str] = Field(default=None, min_length=1)
    color: Optional[str] = Field(default=None, min_length=1)

    @field_validator("*")
    @classmethod
    def reject_null(cls, v, info):
        # Film fields are required on the document: omit a key, never send it as null
        if v is None:
            raise ValueError(f"{info.field_name} must not be null")
        return v
