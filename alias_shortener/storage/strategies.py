"""
URL storage strategies using Strategy Pattern.

Handlers depend on the narrow interfaces (URLSaver, URLGetter, URLDeleter),
so each one can be swapped or mocked on its own. Backends implement all
three:
- SQLStorage: SQLAlchemy (SQLite by default, any SQLAlchemy URL works)
- InMemoryStorage: dict behind a lock, for local runs and tests
"""

import itertools
import threading
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from alias_shortener.database.connection import (
    Base,
    create_db_engine,
    create_session_factory,
)
from alias_shortener.logging_config import ContextLogger
from alias_shortener.models.url import URL
from alias_shortener.storage.errors import (
    StorageError,
    URLExistsError,
    URLNotFoundError,
)


class URLSaver(ABC):

    @abstractmethod
    def save_url(self, target_url: str, alias: str) -> int:
        """
        Persist a new alias -> URL mapping.

        Returns:
            The id assigned to the new record

        Raises:
            URLExistsError: If the alias is already present (nothing is modified)
            ValueError: If target_url or alias is empty
        """
        pass


class URLGetter(ABC):

    @abstractmethod
    def get_url(self, alias: str) -> str:
        """
        Resolve an alias to its target URL.

        Raises:
            URLNotFoundError: If no record has this alias
        """
        pass


class URLDeleter(ABC):

    @abstractmethod
    def delete_url(self, alias: str) -> None:
        """
        Remove the mapping for an alias.

        Raises:
            URLNotFoundError: If no record has this alias
        """
        pass


class URLStorage(URLSaver, URLGetter, URLDeleter):
    """Full storage contract (what the application holds)."""

    def close(self) -> None:
        """Release backend resources."""


def _check_not_empty(target_url: str, alias: str) -> None:
    if not target_url:
        raise ValueError("target url must not be empty")
    if not alias:
        raise ValueError("alias must not be empty")


class SQLStorage(URLStorage):
    """
    SQLAlchemy implementation.

    Every call opens its own session and commits once, so each operation is
    a single atomic unit. Alias uniqueness is left to the UNIQUE constraint
    on url.alias.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.session_factory: sessionmaker = create_session_factory(engine)

    @classmethod
    def from_path(cls, storage_path: str, logger: Optional[ContextLogger] = None) -> "SQLStorage":
        """
        Open storage at a SQLite path or SQLAlchemy URL and create the schema.

        Raises:
            StorageError: If the database cannot be opened
        """
        op = "storage.sql.from_path"
        try:
            engine = create_db_engine(storage_path)
            Base.metadata.create_all(bind=engine)
        except (SQLAlchemyError, OSError) as e:
            raise StorageError(f"{op}: {e}") from e

        storage = cls(engine)
        if logger:
            logger.debug("storage opened", fields={"backend": "sql", "dialect": engine.dialect.name})
        return storage

    def save_url(self, target_url: str, alias: str) -> int:
        op = "storage.sql.save_url"
        _check_not_empty(target_url, alias)

        with self.session_factory() as session:
            record = URL(alias=alias, url=target_url)
            session.add(record)
            try:
                session.commit()
            except IntegrityError as e:
                session.rollback()
                raise URLExistsError(f"{op}: alias {alias!r} already exists") from e
            except SQLAlchemyError as e:
                session.rollback()
                raise StorageError(f"{op}: {e}") from e
            return record.id

    def get_url(self, alias: str) -> str:
        op = "storage.sql.get_url"

        with self.session_factory() as session:
            try:
                record = session.query(URL).filter(URL.alias == alias).first()
            except SQLAlchemyError as e:
                raise StorageError(f"{op}: {e}") from e

            if record is None:
                raise URLNotFoundError(f"{op}: alias {alias!r} not found")
            return record.url

    def delete_url(self, alias: str) -> None:
        op = "storage.sql.delete_url"

        with self.session_factory() as session:
            try:
                deleted = session.query(URL).filter(URL.alias == alias).delete()
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                raise StorageError(f"{op}: {e}") from e

        if deleted == 0:
            raise URLNotFoundError(f"{op}: alias {alias!r} not found")

    def close(self) -> None:
        self.engine.dispose()


class InMemoryStorage(URLStorage):
    """
    In-memory implementation.

    Nothing survives a restart. A single lock makes the check-and-insert in
    save_url atomic.
    """

    def __init__(self):
        self._records: Dict[str, Tuple[int, str]] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def save_url(self, target_url: str, alias: str) -> int:
        _check_not_empty(target_url, alias)

        with self._lock:
            if alias in self._records:
                raise URLExistsError(f"storage.memory.save_url: alias {alias!r} already exists")
            record_id = next(self._ids)
            self._records[alias] = (record_id, target_url)
            return record_id

    def get_url(self, alias: str) -> str:
        with self._lock:
            record = self._records.get(alias)
        if record is None:
            raise URLNotFoundError(f"storage.memory.get_url: alias {alias!r} not found")
        return record[1]

    def delete_url(self, alias: str) -> None:
        with self._lock:
            if self._records.pop(alias, None) is None:
                raise URLNotFoundError(f"storage.memory.delete_url: alias {alias!r} not found")
