"""
Core module - Configuration, database, storage, security, and utilities.
"""

from scholarship_portal.core.config import get_settings, settings
from scholarship_portal.core.database import Base, Database, close_db, get_database, get_db, init_db
from scholarship_portal.core.redis import close_redis, get_redis, init_redis
from scholarship_portal.core.security import hash_password, verify_password
from scholarship_portal.core.storage import DocumentStore, get_document_store

__all__ = [
    # Config
    "settings",
    "get_settings",
    # Database
    "Base",
    "Database",
    "get_db",
    "get_database",
    "init_db",
    "close_db",
    # Redis
    "get_redis",
    "init_redis",
    "close_redis",
    # Storage
    "DocumentStore",
    "get_document_store",
    # Security
    "hash_password",
    "verify_password",
]
