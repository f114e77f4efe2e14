"""
API Routes: Films

GET    /films               - Newest films, ``?limit=``
POST   /films               - Create a film (author = current user)
GET    /films/promo         - Promo film
GET    /films/genre/{genre} - Newest films of a genre, ``?limit=``
GET    /films/{id}          - Film detail
PATCH  /films/{id}          - Update a film (author only)
DELETE /films/{id}          - Delete a film with its comments and favorites (author only)

List and detail responses carry ``isFavorite`` for the current user;
anonymous requests always see false.
"""

import logging
from typing import Any, List, Optional

from fastapi.responses import Response

from whattowatch.api.errors import ConflictError, NotFoundError, UnauthorizedError, ValidationError
from whattowatch.api.middlewares import (
    DocumentExistsMiddleware,
    PrivateRouteMiddleware,
    ValidateDtoMiddleware,
    ValidateObjectIdMiddleware,
)
from whattowatch.api.responses import FILM_DETAIL_RESPONSE, FILM_RESPONSE
from whattowatch.api.routing import Controller, HttpMethod, RequestContext
from whattowatch.api.shaping import shape, shape_many
from whattowatch.models import Genre
from whattowatch.schemas import CreateFilmDto, UpdateFilmDto
from whattowatch.services import CommentService, FavoriteService, FilmService, UserService

logger = logging.getLogger(__name__)


def reference_id(value: Any) -> Optional[str]:
    """Id of a referenced document, whether it is loaded or still a link."""
    if value is None:
        return None
    ref = getattr(value, "ref", None)
    if ref is not None:
        return str(ref.id)
    document_id = getattr(value, "id", None)
    return str(document_id) if document_id is not None else None


def parse_limit(ctx: RequestContext) -> Optional[int]:
    raw = ctx.query.get("limit")
    if raw is None or raw == "":
        return None
    try:
        limit = int(raw)
    except ValueError:
        limit = 0
    if limit <= 0:
        raise ValidationError(
            f"Limit must be a positive integer, got {raw}",
            details=[{"field": "limit", "message": "Expected a positive integer"}],
            origin="FilmController",
        )
    return limit


class FilmController(Controller):
    def __init__(
        self,
        films: FilmService,
        users: UserService,
        comments: CommentService,
        favorites: FavoriteService,
    ):
        super().__init__(prefix="/films", tags=["Films"])
        self.films = films
        self.users = users
        self.comments = comments
        self.favorites = favorites

        self.add_route("", HttpMethod.GET, self.index)
        self.add_route("", HttpMethod.POST, self.create, [
            PrivateRouteMiddleware(),
            ValidateDtoMiddleware(CreateFilmDto),
        ])
        self.add_route("/promo", HttpMethod.GET, self.promo)
        self.add_route("/genre/{genre}", HttpMethod.GET, self.find_by_genre)
        self.add_route("/{id}", HttpMethod.GET, self.show, [
            ValidateObjectIdMiddleware("id"),
            DocumentExistsMiddleware(self.films, "Film", "id"),
        ])
        self.add_route("/{id}", HttpMethod.PATCH, self.update, [
            PrivateRouteMiddleware(),
            ValidateObjectIdMiddleware("id"),
            ValidateDtoMiddleware(UpdateFilmDto),
            DocumentExistsMiddleware(self.films, "Film", "id"),
        ])
        self.add_route("/{id}", HttpMethod.DELETE, self.delete, [
            PrivateRouteMiddleware(),
            ValidateObjectIdMiddleware("id"),
            DocumentExistsMiddleware(self.films, "Film", "id"),
        ])

    async def index(self, ctx: RequestContext) -> Response:
        films = await self.films.find(parse_limit(ctx))
        return self.ok(await self._shape_list(ctx, films))

    async def create(self, ctx: RequestContext) -> Response:
        author = await self.users.find_by_id(ctx.user.id)
        if not author:
            raise UnauthorizedError("Unauthorized", origin="FilmController")

        film = await self.films.create(ctx.dto, author)
        return self.created(shape(film, FILM_DETAIL_RESPONSE, {"user": author, "isFavorite": False}))

    async def promo(self, ctx: RequestContext) -> Response:
        film = await self.films.find_promo()
        if not film:
            raise NotFoundError("Promo film not found.", origin="FilmController")
        return self.ok(await self._shape_detail(ctx, film))

    async def find_by_genre(self, ctx: RequestContext) -> Response:
        raw_genre = ctx.params["genre"]
        try:
            genre = Genre(raw_genre)
        except ValueError:
            allowed = ", ".join(g.value for g in Genre)
            raise ValidationError(
                f"Genre {raw_genre} not supported, use only: {allowed}",
                details=[{"field": "genre", "message": f"Expected one of: {allowed}"}],
                origin="FilmController",
            ) from None

        films = await self.films.find_by_genre(genre, parse_limit(ctx))
        return self.ok(await self._shape_list(ctx, films))

    async def show(self, ctx: RequestContext) -> Response:
        return self.ok(await self._shape_detail(ctx, ctx.state["film"]))

    async def update(self, ctx: RequestContext) -> Response:
        film_id = ctx.params["id"]
        self._ensure_author(ctx, ctx.state["film"], "Update")

        film = await self.films.update_by_id(film_id, ctx.dto)
        if not film:
            raise NotFoundError(f"Film with id {film_id} not found.", origin="FilmController")
        return self.ok(await self._shape_detail(ctx, film))

    async def delete(self, ctx: RequestContext) -> Response:
        film_id = ctx.params["id"]
        self._ensure_author(ctx, ctx.state["film"], "Delete")

        await self.comments.delete_by_film_id(film_id)
        await self.favorites.delete_by_film_id(film_id)
        film = await self.films.delete_by_id(film_id)
        if not film:
            raise NotFoundError(f"Film with id {film_id} not found.", origin="FilmController")
        return self.ok(shape(film, FILM_RESPONSE))

    def _ensure_author(self, ctx: RequestContext, film: Any, action: str) -> None:
        """Ownership gate: must pass before any mutating call."""
        if reference_id(film.user) != ctx.user.id:
            logger.info(f"{action} of film {film.id} rejected for user {ctx.user.id}")
            raise ConflictError(f"{action} must only author", origin="FilmController")

    async def _shape_detail(self, ctx: RequestContext, film: Any) -> dict:
        is_favorite = False
        if ctx.user is not None:
            is_favorite = await self.favorites.exists(ctx.user.id, str(film.id))
        return shape(film, FILM_DETAIL_RESPONSE, {"isFavorite": is_favorite})

    async def _shape_list(self, ctx: RequestContext, films: List[Any]) -> list:
        favorite_ids = set()
        if ctx.user is not None:
            favorite_ids = await self.favorites.find_film_ids(ctx.user.id)
        return shape_many(films, FILM_RESPONSE, lambda film: {"isFavorite": str(film.id) in favorite_ids})
