"""
Database module initialization.
Exports database components for use throughout the application.
"""

from whattowatch.database.base import BaseDocument, TimestampMixin, utc_now
from whattowatch.database.connection import (
    check_db_connection,
    close_db,
    get_db_info,
    init_db,
)

__all__ = [
    # Connection management
    "init_db",
    "close_db",
    # Base classes
    "BaseDocument",
    "TimestampMixin",
    # Utilities
    "check_db_connection",
    "get_db_info",
    "utc_now",
]
