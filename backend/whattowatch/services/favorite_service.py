"""Favorite marker service."""

import logging
from typing import Set

from beanie import PydanticObjectId

from whattowatch.models import Favorite

logger = logging.getLogger(__name__)


class FavoriteService:
    """
    CRUD facade over the 'favorites' collection.
    """

    async def add(self, user_id: str, film_id: str) -> Favorite:
        """Mark the film as favorite. Adding an existing marker is a no-op."""
        existing = await self._find(user_id, film_id)
        if existing:
            return existing

        favorite = Favorite(
            user_id=PydanticObjectId(user_id),
            film_id=PydanticObjectId(film_id),
        )
        await favorite.insert()
        logger.info(f"User {user_id} added film {film_id} to favorites")
        return favorite

    async def remove(self, user_id: str, film_id: str) -> bool:
        existing = await self._find(user_id, film_id)
        if not existing:
            return False
        await existing.delete()
        logger.info(f"User {user_id} removed film {film_id} from favorites")
        return True

    async def exists(self, user_id: str, film_id: str) -> bool:
        return await self._find(user_id, film_id) is not None

    async def find_film_ids(self, user_id: str) -> Set[str]:
        favorites = await Favorite.find(Favorite.user_id == PydanticObjectId(user_id)).to_list()
        return {str(favorite.film_id) for favorite in favorites}

    async def delete_by_film_id(self, film_id: str) -> int:
        result = await Favorite.find(Favorite.film_id == PydanticObjectId(film_id)).delete()
        deleted = result.deleted_count if result else 0
        logger.info(f"Deleted {deleted} favorite markers of film {film_id}")
        return deleted

    async def _find(self, user_id: str, film_id: str):
        return await Favorite.find_one(
            Favorite.user_id == PydanticObjectId(user_id),
            Favorite.film_id == PydanticObjectId(film_id),
        )
