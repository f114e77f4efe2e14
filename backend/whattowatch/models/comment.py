"""
Comment MongoDB Schema

Defines the Comment document model for the 'comments' collection.

Schema Fields:
- _id: ObjectId
- text: Comment body
- rating: 1-10 score folded into the film rating
- film_id: Reference to films collection
- user: Link to the author in the 'users' collection
- created_at, updated_at: Timestamps

Indexes:
- Compound: (film_id, created_at) for per-film listing
"""

from beanie import Link, PydanticObjectId
from pymongo import DESCENDING, IndexModel

from whattowatch.database.base import BaseDocument
from whattowatch.models.user import User


class Comment(BaseDocument):
    """User comment on a film."""

    text: str
    rating: int
    film_id: PydanticObjectId
    user: Link[User]

    class Settings(BaseDocument.Settings):
        name = "comments"
        indexes = [
            IndexModel([("film_id", 1), ("created_at", DESCENDING)]),
        ]
