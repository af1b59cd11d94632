"""Database package."""
from assocvote.db.session import engine, SessionLocal, get_db, get_db_context
from assocvote.db.base import Base

__all__ = ["engine", "SessionLocal", "get_db", "get_db_context", "Base"]
