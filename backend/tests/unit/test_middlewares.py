"""Tests for the individual route middlewares."""

import asyncio
from types import SimpleNamespace

import pytest
from bson import ObjectId
from starlette.requests import Request

from whattowatch.api.errors import NotFoundError, UnauthorizedError, ValidationError
from whattowatch.api.middlewares import (
    AuthenticateMiddleware,
    DocumentExistsMiddleware,
    PrivateRouteMiddleware,
    ValidateDtoMiddleware,
    ValidateObjectIdMiddleware,
)
from whattowatch.api.routing import RequestContext
from whattowatch.schemas import CreateCommentDto
from whattowatch.security import Identity, TokenService

SECRET = "middleware-test-secret-key-long-enough"


def make_request(headers=None, body: bytes = b"") -> Request:
    raw_headers = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    scope = {"type": "http", "method": "POST", "path": "/test", "headers": raw_headers, "query_string": b""}
    sent = {"done": False}

    async def receive():
        if sent["done"]:
            return {"type": "http.disconnect"}
        sent["done"] = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, receive)


def run(middleware, ctx: RequestContext) -> None:
    asyncio.run(middleware.execute(ctx))


def test_authenticate_leaves_anonymous_requests_alone():
    ctx = RequestContext(request=make_request())

    run(AuthenticateMiddleware(TokenService(SECRET)), ctx)

    assert ctx.user is None


def test_authenticate_attaches_identity():
    tokens = TokenService(SECRET)
    identity = Identity(id=str(ObjectId()), email="user@example.com")
    ctx = RequestContext(request=make_request({"Authorization": f"Bearer {tokens.create_token(identity)}"}))

    run(AuthenticateMiddleware(tokens), ctx)

    assert ctx.user == identity


@pytest.mark.parametrize("header", ["Bearer not-a-token", "Basic abc", "Bearer "])
def test_authenticate_rejects_bad_credentials(header):
    ctx = RequestContext(request=make_request({"Authorization": header}))

    with pytest.raises(UnauthorizedError):
        run(AuthenticateMiddleware(TokenService(SECRET)), ctx)


def test_private_route_requires_identity():
    with pytest.raises(UnauthorizedError):
        run(PrivateRouteMiddleware(), RequestContext(request=make_request()))

    ctx = RequestContext(request=make_request(), user=Identity(id="1", email="a@b.co"))
    run(PrivateRouteMiddleware(), ctx)


def test_object_id_validation():
    valid = RequestContext(request=make_request(), params={"id": str(ObjectId())})
    run(ValidateObjectIdMiddleware("id"), valid)

    invalid = RequestContext(request=make_request(), params={"id": "123"})
    with pytest.raises(ValidationError) as exc_info:
        run(ValidateObjectIdMiddleware("id"), invalid)
    assert exc_info.value.status_code == 400
    assert exc_info.value.details[0]["field"] == "id"


def test_dto_validation_sets_typed_dto():
    ctx = RequestContext(request=make_request(body=b'{"text": "Great movie", "rating": "8", "extra": 1}'))

    run(ValidateDtoMiddleware(CreateCommentDto), ctx)

    assert isinstance(ctx.dto, CreateCommentDto)
    assert ctx.dto.rating == 8
    assert ctx.body["extra"] == 1


def test_dto_validation_names_missing_fields():
    ctx = RequestContext(request=make_request(body=b'{"text": "Great movie"}'))

    with pytest.raises(ValidationError) as exc_info:
        run(ValidateDtoMiddleware(CreateCommentDto), ctx)

    assert [v["field"] for v in exc_info.value.details] == ["rating"]
    assert ctx.dto is None


@pytest.mark.parametrize("body", [b"{not json", b"[1, 2]"])
def test_dto_validation_rejects_non_object_bodies(body):
    ctx = RequestContext(request=make_request(body=body))

    with pytest.raises(ValidationError) as exc_info:
        run(ValidateDtoMiddleware(CreateCommentDto), ctx)

    assert exc_info.value.details[0]["field"] == "body"


class LookupStub:
    def __init__(self, documents):
        self.documents = documents

    async def find_by_id(self, document_id):
        return self.documents.get(document_id)


def test_document_exists_attaches_document():
    film = SimpleNamespace(id="f1", name="Heat")
    ctx = RequestContext(request=make_request(), params={"id": "f1"})

    run(DocumentExistsMiddleware(LookupStub({"f1": film}), "Film", "id"), ctx)

    assert ctx.state["film"] is film


def test_document_exists_rejects_with_configured_status():
    ctx = RequestContext(request=make_request(), params={"id": "missing"})

    with pytest.raises(NotFoundError) as exc_info:
        run(DocumentExistsMiddleware(LookupStub({}), "Film", "id", status_code=422), ctx)

    assert exc_info.value.status_code == 422
    assert "film" not in ctx.state
