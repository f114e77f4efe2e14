"""Film catalog service."""

import logging
from typing import Iterable, List, Optional

from beanie import PydanticObjectId, UpdateResponse
from beanie.operators import In, Inc, Set
from pymongo.errors import PyMongoError

from whattowatch.config import DEFAULT_FILM_COUNT
from whattowatch.database.base import utc_now
from whattowatch.models import Film, Genre, User
from whattowatch.schemas import CreateFilmDto, UpdateFilmDto

logger = logging.getLogger(__name__)

COMMENT_COUNT_ATTEMPTS = 5


class CommentCountConflict(PyMongoError):
    """Concurrent comments kept changing the film counter between read and write."""


class FilmService:
    """
    CRUD facade over the 'films' collection.

    Read operations resolve the author link so responses can embed the user.
    """

    def __init__(self, default_count: int = DEFAULT_FILM_COUNT, promo_film_id: Optional[str] = None):
        self.default_count = default_count
        self.promo_film_id = promo_film_id

    async def create(self, dto: CreateFilmDto, author: User) -> Film:
        film = Film(**dto.model_dump(), user=author)
        await film.insert()
        logger.info(f"New film created: {dto.name}")
        return film

    async def find_by_id(self, film_id: str) -> Optional[Film]:
        return await Film.get(PydanticObjectId(film_id), fetch_links=True)

    async def find(self, limit: Optional[int] = None) -> List[Film]:
        return await (
            Film.find(fetch_links=True)
            .sort("-created_at")
            .limit(limit or self.default_count)
            .to_list()
        )

    async def find_by_genre(self, genre: Genre, limit: Optional[int] = None) -> List[Film]:
        return await (
            Film.find(Film.genre == genre, fetch_links=True)
            .sort("-created_at")
            .limit(limit or self.default_count)
            .to_list()
        )

    async def find_by_ids(self, film_ids: Iterable[str]) -> List[Film]:
        ids = [PydanticObjectId(film_id) for film_id in film_ids]
        if not ids:
            return []
        return await Film.find(In(Film.id, ids), fetch_links=True).sort("-created_at").to_list()

    async def find_promo(self) -> Optional[Film]:
        """
        Film for the promo block.

        Uses the configured promo id when set, then the newest film flagged
        as promo, then the newest film.
        """
        if self.promo_film_id and PydanticObjectId.is_valid(self.promo_film_id):
            film = await self.find_by_id(self.promo_film_id)
            if film:
                return film

        flagged = await (
            Film.find(Film.is_promo == True, fetch_links=True)  # noqa: E712
            .sort("-created_at")
            .limit(1)
            .to_list()
        )
        if flagged:
            return flagged[0]

        newest = await self.find(limit=1)
        return newest[0] if newest else None

    async def update_by_id(self, film_id: str, dto: UpdateFilmDto) -> Optional[Film]:
        changes = dto.model_dump(exclude_unset=True)
        film = await self.find_by_id(film_id)
        if not film:
            return None
        if changes:
            changes["updated_at"] = utc_now()
            await film.set(changes)
            logger.info(f"Updated film {film_id}: {', '.join(sorted(changes))}")
        return film

    async def delete_by_id(self, film_id: str) -> Optional[Film]:
        film = await self.find_by_id(film_id)
        if not film:
            return None
        await film.delete()
        logger.info(f"Deleted film {film_id}")
        return film

    async def inc_comment_count(self, film_id: str, rating: int) -> Optional[Film]:
        """
        Register a new comment on the film.

        Increments comment_amount and folds the comment rating into the
        running average rating. The write only lands if comment_amount is
        still the value the average was computed from; otherwise it re-reads
        and retries.
        """
        object_id = PydanticObjectId(film_id)
        for attempt in range(1, COMMENT_COUNT_ATTEMPTS + 1):
            film = await Film.get(object_id)
            if not film:
                return None

            total = film.rating * film.comment_amount + rating
            new_rating = round(total / (film.comment_amount + 1), 1)
            result = await Film.find_one(
                Film.id == object_id,
                Film.comment_amount == film.comment_amount,
            ).update(
                Inc({Film.comment_amount: 1}),
                Set({Film.rating: new_rating, Film.updated_at: utc_now()}),
                response_type=UpdateResponse.UPDATE_RESULT,
            )
            if result.modified_count:
                film.comment_amount += 1
                film.rating = new_rating
                return film
            logger.debug(f"Comment counter of film {film_id} changed concurrently, attempt {attempt}")

        raise CommentCountConflict(f"Could not update comment counter of film {film_id}")
