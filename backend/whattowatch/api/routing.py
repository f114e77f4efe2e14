"""
Route table and middleware chain.

Controllers register routes in an explicit, inspectable table. Each entry is
``(path, method, handler, middlewares)``. ``Controller.build_router`` turns
the table into a FastAPI ``APIRouter``; at dispatch the middlewares run
strictly in declaration order and the first raised ``HttpError`` stops the
chain before any later step or the handler runs.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Tuple

from fastapi import APIRouter, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

from whattowatch.security import Identity

logger = logging.getLogger(__name__)


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PATCH = "PATCH"
    DELETE = "DELETE"


@dataclass
class RequestContext:
    """
    Per-request state shared by the middleware chain and the handler.

    ``user`` is None for anonymous requests. ``dto`` is set by DTO validation,
    ``state`` holds records resolved by middleware (e.g. the film for ``id``).
    """

    request: Request
    params: Dict[str, str] = field(default_factory=dict)
    query: Dict[str, str] = field(default_factory=dict)
    user: Optional[Identity] = None
    body: Any = None
    dto: Any = None
    state: Dict[str, Any] = field(default_factory=dict)


class Middleware:
    """
    Pre-handler check.

    ``execute`` returns to let the request through or raises ``HttpError``
    to reject it.
    """

    async def execute(self, ctx: RequestContext) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


Handler = Callable[[RequestContext], Awaitable[Response]]


@dataclass(frozen=True)
class RouteDefinition:
    path: str
    method: HttpMethod
    handler: Handler
    middlewares: Tuple[Middleware, ...] = ()


async def run_chain(ctx: RequestContext, middlewares: Sequence[Middleware], handler: Handler) -> Response:
    """Run ``middlewares`` in order, then ``handler``."""
    for middleware in middlewares:
        await middleware.execute(ctx)
    return await handler(ctx)


class Controller:
    """
    Base class for entity controllers.

    Subclasses register their routes in ``__init__`` with ``add_route`` and
    implement handlers as ``async def handler(self, ctx) -> Response``.
    """

    def __init__(self, prefix: str, tags: Optional[List[str]] = None):
        self.prefix = prefix
        self.tags = tags or []
        self._routes: List[RouteDefinition] = []
        logger.info(f"Register routes for {self.__class__.__name__}")

    @property
    def routes(self) -> Tuple[RouteDefinition, ...]:
        return tuple(self._routes)

    def add_route(
        self,
        path: str,
        method: HttpMethod,
        handler: Handler,
        middlewares: Sequence[Middleware] = (),
    ) -> RouteDefinition:
        method = HttpMethod(method)
        if any(route.path == path and route.method == method for route in self._routes):
            raise ValueError(
                f"Route {method.value} {self.prefix}{path} is already registered "
                f"in {self.__class__.__name__}"
            )
        route = RouteDefinition(path=path, method=method, handler=handler, middlewares=tuple(middlewares))
        self._routes.append(route)
        logger.debug(f"Route registered: {method.value} {self.prefix}{path}")
        return route

    def build_router(self, pre_middlewares: Sequence[Middleware] = ()) -> APIRouter:
        """
        Build the FastAPI router for this controller.

        ``pre_middlewares`` run before every route's own chain (application-wide
        steps such as token authentication).
        """
        router = APIRouter(prefix=self.prefix, tags=self.tags)
        for route in self._routes:
            router.add_api_route(
                route.path,
                self._make_endpoint(route, tuple(pre_middlewares)),
                methods=[route.method.value],
                name=f"{self.__class__.__name__}.{route.handler.__name__}",
            )
        return router

    @staticmethod
    def _make_endpoint(route: RouteDefinition, pre_middlewares: Tuple[Middleware, ...]):
        chain = pre_middlewares + route.middlewares

        async def endpoint(request: Request) -> Response:
            ctx = RequestContext(
                request=request,
                params=dict(request.path_params),
                query=dict(request.query_params),
            )
            return await run_chain(ctx, chain, route.handler)

        return endpoint

    # Response helpers

    def send(self, status_code: int, data: Any) -> JSONResponse:
        return JSONResponse(status_code=status_code, content=jsonable_encoder(data))

    def ok(self, data: Any) -> JSONResponse:
        return self.send(200, data)

    def created(self, data: Any) -> JSONResponse:
        return self.send(201, data)

    def no_content(self) -> Response:
        return Response(status_code=204)
