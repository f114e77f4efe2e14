"""
FastAPI application factory for the What To Watch API.

This module:
- Builds the domain services once and hands them to the controllers
- Mounts every controller router with application-wide authentication
- Installs the error boundary and CORS
- Manages the MongoDB connection through the lifespan
"""

from contextlib import asynccontextmanager
from typing import Dict, List, Optional

import logfire
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from whattowatch import __version__
from whattowatch.api.controllers import CommentController, FavoriteController, FilmController, UserController
from whattowatch.api.errors import install_error_handlers
from whattowatch.api.middlewares import AuthenticateMiddleware
from whattowatch.api.routing import Controller
from whattowatch.config import Settings, get_settings
from whattowatch.database import check_db_connection, close_db, get_db_info, init_db
from whattowatch.observability import configure_logging, initialize_logfire
from whattowatch.security import TokenService
from whattowatch.services import Services, create_services


def build_controllers(services: Services, tokens: TokenService) -> List[Controller]:
    return [
        UserController(services.users, tokens),
        FilmController(services.films, services.users, services.comments, services.favorites),
        CommentController(services.comments, services.films, services.users),
        FavoriteController(services.favorites, services.films),
    ]


def create_app(settings: Optional[Settings] = None, services: Optional[Services] = None) -> FastAPI:
    """
    Build the application.

    When ``services`` is given the caller owns persistence and the lifespan
    does not connect to MongoDB.
    """
    settings = settings or get_settings()
    manage_database = services is None
    services = services or create_services(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logfire.info(
            "Starting What To Watch API Server",
            environment=settings.environment,
            debug=settings.debug,
        )

        if manage_database:
            await init_db(settings)
            db_info = get_db_info(settings)
            if await check_db_connection():
                logfire.info("MongoDB connection successful", url=db_info["url"], database=db_info["database"])
            else:
                logfire.error("MongoDB connection failed", url=db_info["url"], database=db_info["database"])

        yield

        logfire.info("Shutting down What To Watch API Server")
        if manage_database:
            await close_db()

    app = FastAPI(
        title="What To Watch API",
        description="Backend API for the What To Watch film catalog",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handlers(app)

    tokens = TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_minutes=settings.jwt_expires_minutes,
    )
    authenticate = AuthenticateMiddleware(tokens)
    for controller in build_controllers(services, tokens):
        app.include_router(controller.build_router(pre_middlewares=[authenticate]))

    @app.get("/health", tags=["Health"])
    async def health_check() -> Dict[str, str]:
        """
        Health check endpoint for load balancers and monitoring.
        """
        db_connected = await check_db_connection() if manage_database else True
        return {
            "status": "healthy" if db_connected else "degraded",
            "service": "what-to-watch-api",
            "version": __version__,
            "database": "connected" if db_connected else "disconnected",
            "environment": settings.environment,
        }

    @app.get("/", tags=["Root"])
    async def root() -> Dict[str, str]:
        """
        Root endpoint - API information.
        """
        return {
            "name": "What To Watch API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    return app


def create_production_app() -> FastAPI:
    """Entry point for ``uvicorn --factory``: logging and Logfire, then the app."""
    settings = get_settings()
    configure_logging(settings.log_level)
    app = create_app(settings)
    if initialize_logfire(settings):
        logfire.instrument_fastapi(app)
    return app
