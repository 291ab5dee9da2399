"""Database utilities - engine, session, migrations."""

from src.portal.core.db.engine import dispose_engine, get_engine
from src.portal.core.db.migrations import run_migrations_async, run_migrations_sync
from src.portal.core.db.session import get_session

__all__ = [
    # Engine
    "dispose_engine",
    "get_engine",
    # Session
    "get_session",
    # Migrations
    "run_migrations_async",
    "run_migrations_sync",
]
