"""
Database configuration and models.
"""

from homecalc.db.database import engine, SessionLocal, get_db, init_db
from homecalc.db.models import Base

__all__ = ["engine", "SessionLocal", "get_db", "init_db", "Base"]
