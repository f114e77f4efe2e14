"""
API Routes: Favorites

GET    /favorites      - Favorite films of the current user
POST   /favorites/{id} - Add film ``id`` to favorites
DELETE /favorites/{id} - Remove film ``id`` from favorites
"""

from fastapi.responses import Response

from whattowatch.api.middlewares import (
    DocumentExistsMiddleware,
    PrivateRouteMiddleware,
    ValidateObjectIdMiddleware,
)
from whattowatch.api.responses import FILM_DETAIL_RESPONSE, FILM_RESPONSE
from whattowatch.api.routing import Controller, HttpMethod, RequestContext
from whattowatch.api.shaping import shape, shape_many
from whattowatch.services import FavoriteService, FilmService


class FavoriteController(Controller):
    def __init__(self, favorites: FavoriteService, films: FilmService):
        super().__init__(prefix="/favorites", tags=["Favorites"])
        self.favorites = favorites
        self.films = films

        film_guards = [
            PrivateRouteMiddleware(),
            ValidateObjectIdMiddleware("id"),
            DocumentExistsMiddleware(self.films, "Film", "id"),
        ]
        self.add_route("", HttpMethod.GET, self.index, [PrivateRouteMiddleware()])
        self.add_route("/{id}", HttpMethod.POST, self.add, film_guards)
        self.add_route("/{id}", HttpMethod.DELETE, self.remove, film_guards)

    async def index(self, ctx: RequestContext) -> Response:
        film_ids = await self.favorites.find_film_ids(ctx.user.id)
        films = await self.films.find_by_ids(film_ids)
        return self.ok(shape_many(films, FILM_RESPONSE, lambda _: {"isFavorite": True}))

    async def add(self, ctx: RequestContext) -> Response:
        await self.favorites.add(ctx.user.id, ctx.params["id"])
        return self.created(shape(ctx.state["film"], FILM_DETAIL_RESPONSE, {"isFavorite": True}))

    async def remove(self, ctx: RequestContext) -> Response:
        await self.favorites.remove(ctx.user.id, ctx.params["id"])
        return self.ok(shape(ctx.state["film"], FILM_DETAIL_RESPONSE, {"isFavorite": False}))
