"""
MongoDB ODM Models Package

Collections:
- users: Registered users
- films: Film cards with author link
- comments: Comments with ratings, one film each
- favorites: User/film favorite markers
"""

from typing import List, Type

from beanie import Document

from whattowatch.models.comment import Comment
from whattowatch.models.favorite import Favorite
from whattowatch.models.film import Film, Genre
from whattowatch.models.user import User


def get_document_models() -> List[Type[Document]]:
    """Document models registered with Beanie on startup."""
    return [User, Film, Comment, Favorite]


__all__ = [
    "Comment",
    "Favorite",
    "Film",
    "Genre",
    "User",
    "get_document_models",
]
