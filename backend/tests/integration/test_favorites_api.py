"""HTTP tests for the favorite routes."""

import asyncio

from bson import ObjectId

from tests.fakes import film_payload
from whattowatch.schemas import CreateFilmDto


def create_film(services, user, name):
    return asyncio.run(services.films.create(CreateFilmDto.model_validate(film_payload(name=name)), user))


def test_add_favorite_is_idempotent(client, services, author, stranger, auth_headers):
    film = create_film(services, author, "Keeper")

    first = client.post(f"/favorites/{film.id}", headers=auth_headers(stranger))
    second = client.post(f"/favorites/{film.id}", headers=auth_headers(stranger))

    assert first.status_code == 201
    assert second.status_code == 201
    assert first.json()["isFavorite"] is True
    assert services.favorites.markers == {(str(stranger.id), str(film.id))}


def test_favorite_flag_shows_on_detail(client, services, author, stranger, auth_headers):
    film = create_film(services, author, "Keeper")
    client.post(f"/favorites/{film.id}", headers=auth_headers(stranger))

    assert client.get(f"/films/{film.id}", headers=auth_headers(stranger)).json()["isFavorite"] is True
    assert client.get(f"/films/{film.id}", headers=auth_headers(author)).json()["isFavorite"] is False
    assert client.get(f"/films/{film.id}").json()["isFavorite"] is False


def test_list_favorites(client, services, author, stranger, auth_headers):
    liked = create_film(services, author, "Liked")
    create_film(services, author, "Ignored")
    client.post(f"/favorites/{liked.id}", headers=auth_headers(stranger))

    response = client.get("/favorites", headers=auth_headers(stranger))

    assert response.status_code == 200
    assert [(f["name"], f["isFavorite"]) for f in response.json()] == [("Liked", True)]


def test_remove_favorite(client, services, author, stranger, auth_headers):
    film = create_film(services, author, "Fleeting")
    client.post(f"/favorites/{film.id}", headers=auth_headers(stranger))

    response = client.delete(f"/favorites/{film.id}", headers=auth_headers(stranger))

    assert response.status_code == 200
    assert response.json()["isFavorite"] is False
    assert services.favorites.markers == set()


def test_favorites_require_authentication(client):
    assert client.get("/favorites").status_code == 401
    assert client.post(f"/favorites/{ObjectId()}").status_code == 401


def test_favorite_missing_film_is_404(client, author, auth_headers):
    response = client.post(f"/favorites/{ObjectId()}", headers=auth_headers(author))

    assert response.status_code == 404
