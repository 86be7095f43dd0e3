"""
Database engine and session factory.

The storage location is a single string: either a path to a SQLite file
or a full SQLAlchemy database URL.
"""

import os

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


def database_url(storage_path: str) -> str:
    """Turn a storage path into a SQLAlchemy URL (URLs pass through)."""
    if "://" in storage_path:
        return storage_path
    return f"sqlite:///{storage_path}"


def create_db_engine(storage_path: str) -> Engine:
    url = database_url(storage_path)

    if url.startswith("sqlite"):
        directory = os.path.dirname(storage_path)
        if "://" not in storage_path and directory:
            os.makedirs(directory, exist_ok=True)
        # Requests are served from a threadpool
        return create_engine(url, connect_args={"check_same_thread": False})

    return create_engine(url, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
