"""
API Routes: Comments

GET  /comments/{id} - Comments of film ``id``, newest first (204 when none)
POST /comments/{id} - Comment on film ``id``; bumps its comment count and rating
"""

from fastapi.responses import Response

from whattowatch.api.errors import UnauthorizedError
from whattowatch.api.middlewares import (
    DocumentExistsMiddleware,
    PrivateRouteMiddleware,
    ValidateDtoMiddleware,
    ValidateObjectIdMiddleware,
)
from whattowatch.api.responses import COMMENT_RESPONSE
from whattowatch.api.routing import Controller, HttpMethod, RequestContext
from whattowatch.api.shaping import shape, shape_many
from whattowatch.schemas import CreateCommentDto
from whattowatch.services import CommentService, FilmService, UserService


class CommentController(Controller):
    def __init__(self, comments: CommentService, films: FilmService, users: UserService):
        super().__init__(prefix="/comments", tags=["Comments"])
        self.comments = comments
        self.films = films
        self.users = users

        self.add_route("/{id}", HttpMethod.GET, self.index, [ValidateObjectIdMiddleware("id")])
        self.add_route("/{id}", HttpMethod.POST, self.create, [
            PrivateRouteMiddleware(),
            ValidateObjectIdMiddleware("id"),
            ValidateDtoMiddleware(CreateCommentDto),
            DocumentExistsMiddleware(self.films, "Film", "id", status_code=422),
        ])

    async def index(self, ctx: RequestContext) -> Response:
        comments = await self.comments.find_by_film_id(ctx.params["id"])
        if not comments:
            return self.no_content()
        return self.ok(shape_many(comments, COMMENT_RESPONSE))

    async def create(self, ctx: RequestContext) -> Response:
        film_id = ctx.params["id"]
        author = await self.users.find_by_id(ctx.user.id)
        if not author:
            raise UnauthorizedError("Unauthorized", origin="CommentController")

        comment = await self.comments.create(film_id, ctx.dto, author)
        await self.films.inc_comment_count(film_id, ctx.dto.rating)
        return self.created(shape(comment, COMMENT_RESPONSE, {"user": author}))
