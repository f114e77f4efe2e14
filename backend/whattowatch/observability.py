"""Logging setup and Logfire cloud observability initialization."""

import logging

import logfire

from whattowatch import __version__
from whattowatch.config import Settings

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure console logging for the API process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def initialize_logfire(settings: Settings) -> bool:
    """
    Initialize Logfire with instrumentation.

    Must be called ONCE at application startup, before the app handles requests.

    This function configures Logfire cloud tracking and instruments:
    - PyMongo (queries issued by Motor/Beanie)
    - Python logging, bridged to Logfire

    FastAPI instrumentation needs the app instance and is applied in
    ``create_production_app`` when this function returns True.

    Args:
        settings: Application settings containing Logfire token

    Returns:
        True when Logfire is configured, False when observability is disabled.
    """
    if not settings.logfire_token:
        logger.warning("Logfire token not set - observability disabled")
        return False

    try:
        logfire.configure(
            token=settings.logfire_token,
            service_name="what-to-watch",
            service_version=__version__,
            environment=settings.environment,
        )

        logfire.instrument_pymongo()

        root_logger = logging.getLogger()
        root_logger.addHandler(logfire.LogfireLoggingHandler())

        logger.info("Logfire cloud tracking initialized")
        return True

    except Exception as e:
        logger.warning(f"Failed to initialize Logfire: {e}")
        # Continue running - observability is optional
        return False
