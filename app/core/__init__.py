"""Core infrastructure: config, database, logging, middleware, exceptions."""

from app.core.config import Settings, get_settings
from app.core.database import Base, dispose_engine, get_db
from app.core.exceptions import DatabaseError, ScoutAnalyticsError, ValidationError
from app.core.logging import get_logger, request_id_ctx

__all__ = [
    "Base",
    "DatabaseError",
    "ScoutAnalyticsError",
    "Settings",
    "ValidationError",
    "dispose_engine",
    "get_db",
    "get_logger",
    "get_settings",
    "request_id_ctx",
]
