"""Domain services: per-entity CRUD over the document store."""

from dataclasses import dataclass

from whattowatch.config import Settings
from whattowatch.services.comment_service import CommentService
from whattowatch.services.favorite_service import FavoriteService
from whattowatch.services.film_service import FilmService
from whattowatch.services.user_service import UserService


@dataclass
class Services:
    """Service objects built once at process start and passed to controllers."""

    users: UserService
    films: FilmService
    comments: CommentService
    favorites: FavoriteService


def create_services(settings: Settings) -> Services:
    return Services(
        users=UserService(salt=settings.salt),
        films=FilmService(
            default_count=settings.default_film_count,
            promo_film_id=settings.promo_film_id,
        ),
        comments=CommentService(default_count=settings.default_comment_count),
        favorites=FavoriteService(),
    )


__all__ = [
    "CommentService",
    "FavoriteService",
    "FilmService",
    "Services",
    "UserService",
    "create_services",
]
