"""
Database module for SQLAlchemy models and session management.
"""

from bizconnect.db.base import Base
from bizconnect.db.session import close_db, get_db, get_db_context, get_engine

__all__ = ["Base", "close_db", "get_db", "get_db_context", "get_engine"]
