"""Comment service."""

import logging
from typing import List, Optional

from beanie import PydanticObjectId

from whattowatch.config import DEFAULT_COMMENT_COUNT
from whattowatch.models import Comment, User
from whattowatch.schemas import CreateCommentDto

logger = logging.getLogger(__name__)


class CommentService:
    """
    CRUD facade over the 'comments' collection.
    """

    def __init__(self, default_count: int = DEFAULT_COMMENT_COUNT):
        self.default_count = default_count

    async def create(self, film_id: str, dto: CreateCommentDto, author: User) -> Comment:
        comment = Comment(
            text=dto.text,
            rating=dto.rating,
            film_id=PydanticObjectId(film_id),
            user=author,
        )
        await comment.insert()
        logger.info(f"New comment on film {film_id} by {author.email}")
        return comment

    async def find_by_film_id(self, film_id: str, limit: Optional[int] = None) -> List[Comment]:
        return await (
            Comment.find(Comment.film_id == PydanticObjectId(film_id), fetch_links=True)
            .sort("-created_at")
            .limit(limit or self.default_count)
            .to_list()
        )

    async def delete_by_film_id(self, film_id: str) -> int:
        result = await Comment.find(Comment.film_id == PydanticObjectId(film_id)).delete()
        deleted = result.deleted_count if result else 0
        logger.info(f"Deleted {deleted} comments of film {film_id}")
        return deleted
