"""Entity controllers."""

from whattowatch.api.controllers.comments import CommentController
from whattowatch.api.controllers.favorites import FavoriteController
from whattowatch.api.controllers.films import FilmController
from whattowatch.api.controllers.users import UserController

__all__ = [
    "CommentController",
    "FavoriteController",
    "FilmController",
    "UserController",
]
