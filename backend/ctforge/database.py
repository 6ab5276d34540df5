# backend/ctforge/database.py
import logging
from functools import lru_cache

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from ctforge.config import get_settings

logger = logging.getLogger(__name__)


@lru_cache
def get_client() -> MongoClient:
    """Get the shared MongoClient (lazily connects on first operation)."""
    settings = get_settings()
    logger.info(f"Creating MongoDB client for database '{settings.mongodb_database}'")
    # tz_aware so metadata timestamps round-trip as UTC-aware datetimes
    return MongoClient(
        settings.mongodb_url,
        tz_aware=True,
        appname=settings.app_name,
        serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
    )


def get_db() -> Database:
    return get_client()[get_settings().mongodb_database]


def get_scenario_collection() -> Collection:
    return get_db()[get_settings().scenario_collection]
