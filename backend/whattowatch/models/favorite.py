"""
Favorite MongoDB Schema

Defines the Favorite document model for the 'favorites' collection.
One document marks one film as a favorite of one user.

Schema Fields:
- _id: ObjectId
- user_id: Reference to users collection
- film_id: Reference to films collection
- created_at, updated_at: Timestamps

Indexes:
- Compound: (user_id, film_id) unique
- film_id (cascade deletes)
"""

from beanie import PydanticObjectId
from pymongo import IndexModel

from whattowatch.database.base import BaseDocument


class Favorite(BaseDocument):
    """Favorite marker linking a user to a film."""

    user_id: PydanticObjectId
    film_id: PydanticObjectId

    class Settings(BaseDocument.Settings):
        name = "favorites"
        indexes = [
            IndexModel([("user_id", 1), ("film_id", 1)], unique=True),
            IndexModel([("film_id", 1)]),
        ]
