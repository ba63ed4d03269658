"""
Database connection management.

The engine and session factory are created on first use rather than at import
time, so importing the package (or running tests against an in-memory
database) never requires DATABASE_URL to point at a real server.

Environment variables:
    - DATABASE_URL: SQLAlchemy connection URL (default: local sqlite file)
"""

from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from . import config
from .models import Base

engine: Optional[Engine] = None
SessionLocal: Optional[sessionmaker] = None


def init_db(database_url: Optional[str] = None) -> sessionmaker:
    """
    Create the engine, session factory and tables.

    Args:
        database_url: Overrides config.DATABASE_URL when given

    Returns:
        The session factory bound to the new engine
    """
    global engine, SessionLocal

    url = database_url or config.DATABASE_URL
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    engine = create_engine(url, pool_pre_ping=True, echo=False, connect_args=connect_args)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    return SessionLocal


def get_session_factory() -> sessionmaker:
    """Return the session factory, initializing the database if needed."""
    if SessionLocal is None:
        return init_db()
    return SessionLocal
