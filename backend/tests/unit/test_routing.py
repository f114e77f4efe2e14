"""Tests for the route table and middleware chain."""

from typing import List

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from whattowatch.api.errors import NotFoundError, UnauthorizedError, install_error_handlers
from whattowatch.api.routing import Controller, HttpMethod, Middleware, RequestContext


class RecordingMiddleware(Middleware):
    def __init__(self, name: str, log: List[str], reject: bool = False):
        self.name = name
        self.log = log
        self.reject = reject

    async def execute(self, ctx: RequestContext) -> None:
        self.log.append(self.name)
        ctx.state.setdefault("seen", []).append(self.name)
        if self.reject:
            raise UnauthorizedError(f"{self.name} rejected", origin=self.name)


class PingController(Controller):
    def __init__(self, log: List[str], middlewares):
        super().__init__(prefix="/ping", tags=["Ping"])
        self.log = log
        self.add_route("", HttpMethod.GET, self.index, middlewares)
        self.add_route("/{name}", HttpMethod.GET, self.show)

    async def index(self, ctx: RequestContext):
        self.log.append("handler")
        return self.ok({"seen": ctx.state.get("seen", [])})

    async def show(self, ctx: RequestContext):
        if ctx.params["name"] == "missing":
            raise NotFoundError("Nothing here", origin="PingController")
        return self.ok({"name": ctx.params["name"], "query": ctx.query})


def build_client(controller: Controller) -> TestClient:
    app = FastAPI()
    install_error_handlers(app)
    app.include_router(controller.build_router())
    return TestClient(app)


def test_middlewares_run_in_declaration_order_before_handler():
    log: List[str] = []
    controller = PingController(log, [RecordingMiddleware("first", log), RecordingMiddleware("second", log)])

    response = build_client(controller).get("/ping")

    assert response.status_code == 200
    assert log == ["first", "second", "handler"]
    assert response.json() == {"seen": ["first", "second"]}


def test_rejecting_middleware_halts_chain():
    log: List[str] = []
    controller = PingController(log, [
        RecordingMiddleware("first", log),
        RecordingMiddleware("guard", log, reject=True),
        RecordingMiddleware("never", log),
    ])

    response = build_client(controller).get("/ping")

    assert response.status_code == 401
    assert log == ["first", "guard"]
    assert response.json() == {"status": 401, "message": "guard rejected", "origin": "guard"}


def test_pre_middlewares_run_before_route_middlewares():
    log: List[str] = []
    controller = PingController(log, [RecordingMiddleware("route", log)])
    app = FastAPI()
    app.include_router(controller.build_router(pre_middlewares=[RecordingMiddleware("app", log)]))

    TestClient(app).get("/ping")

    assert log == ["app", "route", "handler"]


def test_duplicate_route_is_rejected():
    controller = PingController([], [])

    with pytest.raises(ValueError):
        controller.add_route("", HttpMethod.GET, controller.index)


def test_same_path_with_other_method_is_allowed():
    controller = PingController([], [])

    route = controller.add_route("", HttpMethod.POST, controller.index)

    assert route.method is HttpMethod.POST
    assert [(r.path, r.method.value) for r in controller.routes] == [
        ("", "GET"),
        ("/{name}", "GET"),
        ("", "POST"),
    ]


def test_path_and_query_params_reach_handler():
    response = build_client(PingController([], [])).get("/ping/alice?limit=3")

    assert response.json() == {"name": "alice", "query": {"limit": "3"}}


def test_handler_errors_use_uniform_body():
    response = build_client(PingController([], [])).get("/ping/missing")

    assert response.status_code == 404
    assert response.json() == {"status": 404, "message": "Nothing here", "origin": "PingController"}


@pytest.mark.parametrize("method, path", [
    ("GET", "/nowhere"),
    ("DELETE", "/ping"),
    ("PATCH", "/ping/alice"),
])
def test_unregistered_route_is_404(method, path):
    response = build_client(PingController([], [])).request(method, path)

    assert response.status_code == 404
    assert response.json()["status"] == 404
    assert response.json()["origin"] == "Router"


def test_unexpected_errors_do_not_leak_details():
    class Broken(Controller):
        def __init__(self):
            super().__init__(prefix="/broken")
            self.add_route("", HttpMethod.GET, self.index)

        async def index(self, ctx: RequestContext):
            raise RuntimeError("connection string mongodb://user:pw@host")

    app = FastAPI()
    install_error_handlers(app)
    app.include_router(Broken().build_router())

    response = TestClient(app, raise_server_exceptions=False).get("/broken")

    assert response.status_code == 500
    assert response.json() == {"status": 500, "message": "Internal server error", "origin": "App"}


def test_database_failures_map_to_upstream_error():
    from pymongo.errors import ServerSelectionTimeoutError

    class Flaky(Controller):
        def __init__(self):
            super().__init__(prefix="/flaky")
            self.add_route("", HttpMethod.GET, self.index)

        async def index(self, ctx: RequestContext):
            raise ServerSelectionTimeoutError("no servers available")

    app = FastAPI()
    install_error_handlers(app)
    app.include_router(Flaky().build_router())

    response = TestClient(app).get("/flaky")

    assert response.status_code == 503
    assert response.json() == {"status": 503, "message": "Database is unavailable", "origin": "Database"}
