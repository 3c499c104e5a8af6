"""Database schema migrations: ensure tables exist based on ORM models."""

import os
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from .models import Base

metadata = Base.metadata


def EnsureMigrated(database_url: str) -> None:
    """Ensure the ticket store and all ORM tables exist.

    For file-backed SQLite URLs the parent directory is created first.
    """
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        os.makedirs(os.path.dirname(os.path.abspath(url.database)), exist_ok=True)

    engine = create_engine(database_url)
    try:
        Base.metadata.create_all(engine)
    finally:
        engine.dispose()
