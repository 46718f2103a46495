"""Database package."""
from officeops.db.session import engine, SessionLocal, get_db, get_db_context
from officeops.db.base import Base

__all__ = ["engine", "SessionLocal", "get_db", "get_db_context", "Base"]
