"""
Film MongoDB Schema

Defines the Film document model for the 'films' collection.

Schema Fields:
- _id: ObjectId
- name, description, genre, released (year)
- rating: Average of the initial rating and every comment rating
- preview_video_link, video_link, poster_image, background_image, color
- actors: Array of actor names
- producer, run_time (minutes)
- comment_amount: Number of comments posted for the film
- user: Link to the author in the 'users' collection
- is_promo: Candidate for the promo endpoint
- created_at, updated_at: Timestamps (created_at is the publication date)

Indexes:
- genre
- created_at (list ordering)
"""

from enum import Enum
from typing import List

from beanie import Link
from pydantic import Field
from pymongo import DESCENDING, IndexModel

from whattowatch.database.base import BaseDocument
from whattowatch.models.user import User


class Genre(str, Enum):
    """Film genres accepted by the catalog."""

    COMEDY = "comedy"
    CRIME = "crime"
    DOCUMENTARY = "documentary"
    DRAMA = "drama"
    HORROR = "horror"
    FAMILY = "family"
    ROMANCE = "romance"
    SCIFI = "scifi"
    THRILLER = "thriller"


class Film(BaseDocument):
    """Film card in the catalog."""

    name: str
    description: str
    genre: Genre
    released: int
    rating: float = 0.0
    preview_video_link: str
    video_link: str
    actors: List[str] = Field(default_factory=list)
    producer: str
    run_time: int
    comment_amount: int = 0
    user: Link[User]
    poster_image: str
    background_image: str
    color: str
    is_promo: bool = False

    class Settings(BaseDocument.Settings):
        name = "films"
        indexes = [
            IndexModel([("genre", 1)]),
            IndexModel([("created_at", DESCENDING)]),
        ]
