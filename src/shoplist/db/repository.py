"""Database handle: engine, schema and session management."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from shoplist.config import Settings
from shoplist.db.models import Base
from shoplist.errors import StoreError

logger = logging.getLogger(__name__)


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:  # noqa: ARG001
    # SQLite ignores ON DELETE CASCADE unless enforcement is switched on per connection.
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


class Database:
    """SQLite-backed store handle.

    Construct one per process, call :meth:`open` at startup and :meth:`close`
    at shutdown, and pass it to the stores that need it.
    """

    def __init__(self, path: Path, *, echo: bool = False):
        self.path = Path(path)
        self.echo = echo
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker[Session]] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.database_path)

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database is not open")
        return self._engine

    def open(self) -> "Database":
        """Create the engine and schema; calling it on an open handle is a no-op."""

        if self._engine is not None:
            return self

        self.path.parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(f"sqlite:///{self.path}", future=True, echo=self.echo)
        event.listen(engine, "connect", _enable_foreign_keys)
        try:
            Base.metadata.create_all(engine)
        except OperationalError as exc:
            if "already exists" in str(exc).lower():
                logger.debug("Database schema already initialized: %s", exc)
            else:
                engine.dispose()
                raise

        self._engine = engine
        self._session_factory = sessionmaker(
            bind=engine, autoflush=False, autocommit=False, future=True
        )
        logger.info("Opened database at %s", self.path)
        return self

    def close(self) -> None:
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Closed database at %s", self.path)

    def __enter__(self) -> "Database":
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()

    def session(self) -> Session:
        """Return a new SQLAlchemy session bound to this database."""

        if self._session_factory is None:
            raise RuntimeError("Database is not open")
        return self._session_factory()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """Yield a session that commits on success and rolls back on any error.

        SQLAlchemy failures surface as :class:`StoreError`; domain errors raised
        inside the block propagate unchanged.
        """

        session = self.session()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.exception("Database operation failed on %s", self.path)
            raise StoreError("Database operation failed") from exc
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


__all__ = ["Database"]
