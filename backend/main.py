"""
Main FastAPI application entry point for What To Watch.

Run with ``uvicorn main:app`` from the backend directory, or use
``python -m whattowatch serve``.
"""

from dotenv import load_dotenv

load_dotenv()

from whattowatch.api import create_production_app
from whattowatch.config import get_settings

app = create_production_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )
