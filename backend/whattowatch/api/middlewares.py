"""Route middlewares: authentication, id format, DTO validation, existence."""

import logging
from json import JSONDecodeError
from typing import Any, Awaitable, Optional, Protocol, Type

from bson import ObjectId
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from whattowatch.api.errors import NotFoundError, UnauthorizedError, ValidationError, format_violations
from whattowatch.api.routing import Middleware, RequestContext
from whattowatch.security import InvalidTokenError, TokenService

logger = logging.getLogger(__name__)


class AuthenticateMiddleware(Middleware):
    """
    Resolve the acting user from ``Authorization: Bearer <token>``.

    No header means an anonymous request; a malformed header or a bad token
    is rejected.
    """

    def __init__(self, tokens: TokenService):
        self.tokens = tokens

    async def execute(self, ctx: RequestContext) -> None:
        header = ctx.request.headers.get("authorization")
        if not header:
            return

        scheme, _, token = header.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise UnauthorizedError("Malformed authorization header", origin=self.__class__.__name__)

        try:
            ctx.user = self.tokens.decode_token(token.strip())
        except InvalidTokenError as e:
            logger.debug(f"Rejected token: {e}")
            raise UnauthorizedError("Invalid token", origin=self.__class__.__name__) from e


class PrivateRouteMiddleware(Middleware):
    """Require an authenticated user."""

    async def execute(self, ctx: RequestContext) -> None:
        if ctx.user is None:
            raise UnauthorizedError("Unauthorized", origin=self.__class__.__name__)


class ValidateObjectIdMiddleware(Middleware):
    """Require path parameter ``param`` to be a well-formed ObjectId."""

    def __init__(self, param: str):
        self.param = param

    async def execute(self, ctx: RequestContext) -> None:
        value = ctx.params.get(self.param, "")
        if not ObjectId.is_valid(value):
            raise ValidationError(
                f"{value} is invalid ObjectID",
                details=[{"field": self.param, "message": "Invalid ObjectId"}],
                origin=self.__class__.__name__,
            )

    def __repr__(self) -> str:
        return f"ValidateObjectIdMiddleware({self.param!r})"


class ValidateDtoMiddleware(Middleware):
    """Validate the JSON body against ``dto``; the parsed DTO lands on ``ctx.dto``."""

    def __init__(self, dto: Type[BaseModel]):
        self.dto = dto

    async def execute(self, ctx: RequestContext) -> None:
        ctx.body = await self._read_body(ctx)
        if not isinstance(ctx.body, dict):
            raise ValidationError(
                "Request body must be a JSON object",
                details=[{"field": "body", "message": "Expected a JSON object"}],
                origin=self.__class__.__name__,
            )

        try:
            ctx.dto = self.dto.model_validate(ctx.body)
        except PydanticValidationError as e:
            raise ValidationError(
                f"Validation error: {ctx.request.url.path}",
                details=format_violations(e.errors()),
                origin=self.__class__.__name__,
            ) from e

    async def _read_body(self, ctx: RequestContext) -> Any:
        raw = await ctx.request.body()
        if not raw:
            return {}
        try:
            return await ctx.request.json()
        except (JSONDecodeError, UnicodeDecodeError) as e:
            raise ValidationError(
                "Request body is not valid JSON",
                details=[{"field": "body", "message": str(e)}],
                origin=self.__class__.__name__,
            ) from e

    def __repr__(self) -> str:
        return f"ValidateDtoMiddleware({self.dto.__name__})"


class DocumentLookup(Protocol):
    def find_by_id(self, document_id: str) -> Awaitable[Optional[Any]]:
        ...


class DocumentExistsMiddleware(Middleware):
    """
    Resolve the document named by path parameter ``param``.

    The document is stored in ``ctx.state[state_key]`` for later steps;
    a missing document is rejected with ``status_code`` (404 by default,
    422 where the route creates something that references it).
    """

    def __init__(
        self,
        service: DocumentLookup,
        entity_name: str,
        param: str,
        status_code: int = 404,
        state_key: Optional[str] = None,
    ):
        self.service = service
        self.entity_name = entity_name
        self.param = param
        self.status_code = status_code
        self.state_key = state_key or entity_name.lower()

    async def execute(self, ctx: RequestContext) -> None:
        document_id = ctx.params.get(self.param, "")
        document = await self.service.find_by_id(document_id)
        if document is None:
            raise NotFoundError(
                f"{self.entity_name} with id {document_id} not found.",
                status_code=self.status_code,
                origin=self.__class__.__name__,
            )
        ctx.state[self.state_key] = document

    def __repr__(self) -> str:
        return f"DocumentExistsMiddleware({self.entity_name!r}, {self.param!r})"
