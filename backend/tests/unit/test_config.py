"""Tests for settings parsing."""

import pytest
from pydantic import ValidationError

from whattowatch.config import Settings
from whattowatch.database.connection import _sanitize_mongodb_url


def test_mongodb_url_built_from_parts():
    settings = Settings(
        _env_file=None,
        db_user="admin",
        db_password="pw",
        db_host="db",
        db_port=27018,
        db_name="films",
    )

    assert settings.mongodb_url == "mongodb://admin:pw@db:27018/films?authSource=admin"


def test_explicit_uri_wins():
    settings = Settings(_env_file=None, mongodb_uri="mongodb+srv://u:p@cluster/app")

    assert settings.mongodb_url == "mongodb+srv://u:p@cluster/app"


def test_allowed_origins_parsed_from_comma_list():
    settings = Settings(_env_file=None, allowed_origins="http://a.test, http://b.test,")

    assert settings.allowed_origins == ["http://a.test", "http://b.test"]


def test_list_sizes_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, default_film_count=0)


def test_credentials_are_masked_for_logging():
    assert _sanitize_mongodb_url("mongodb://admin:pw@db:27017/films") == "mongodb://admin:***@db:27017/films"
    assert _sanitize_mongodb_url("mongodb://localhost:27017") == "mongodb://localhost:27017"


def test_services_are_built_from_settings():
    from whattowatch.services import create_services

    services = create_services(Settings(_env_file=None, salt="pepper", default_film_count=12, promo_film_id="abc"))

    assert services.users.salt == "pepper"
    assert services.films.default_count == 12
    assert services.films.promo_film_id == "abc"
    assert services.comments.default_count == 50
