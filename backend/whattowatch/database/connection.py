"""
MongoDB connection and Beanie ODM initialization.

This module provides:
- MongoDB client connection via Motor (async driver)
- Beanie ODM initialization
- Health check utilities
"""

import logging
from typing import Optional

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from whattowatch.config import Settings

logger = logging.getLogger(__name__)

# Global MongoDB client instance
_client: Optional[AsyncIOMotorClient] = None


async def init_db(settings: Settings) -> None:
    """
    Initialize MongoDB connection and Beanie ODM.

    Creates the collection indexes declared on the document models.
    """
    global _client

    # Imported here so the models package stays free of connection state
    from whattowatch.models import get_document_models

    _client = AsyncIOMotorClient(settings.mongodb_url)

    await init_beanie(
        database=_client[settings.db_name],
        document_models=get_document_models(),
    )
    logger.info(f"Connected to MongoDB at {_sanitize_mongodb_url(settings.mongodb_url)}")


async def close_db() -> None:
    """
    Close MongoDB connection.
    """
    global _client
    if _client is not None:
        _client.close()
        _client = None
        logger.info("MongoDB connection closed")


async def check_db_connection() -> bool:
    """
    Check if MongoDB connection is healthy.
    """
    if _client is None:
        return False

    try:
        await _client.admin.command("ping")
        return True
    except PyMongoError as e:
        logger.warning(f"MongoDB ping failed: {e}")
        return False


def get_db_info(settings: Settings) -> dict:
    """
    Get database connection information and status.
    """
    return {
        "status": "connected" if _client is not None else "disconnected",
        "url": _sanitize_mongodb_url(settings.mongodb_url),
        "database": settings.db_name,
        "environment": settings.environment,
    }


def _sanitize_mongodb_url(url: str) -> str:
    """
    Hide password in MongoDB URL for safe logging.
    """
    if "@" not in url:
        return url

    try:
        # Handle mongodb+srv:// or mongodb://
        if "://" in url:
            protocol, rest = url.split("://", 1)
            if "@" in rest:
                credentials, host = rest.split("@", 1)
                if ":" in credentials:
                    username = credentials.split(":", 1)[0]
                    return f"{protocol}://{username}:***@{host}"
        return url
    except ValueError:
        return url
