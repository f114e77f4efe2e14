"""HTTP layer: route table, middleware chain, response shaping and controllers."""

from whattowatch.api.app import create_app, create_production_app

__all__ = ["create_app", "create_production_app"]
