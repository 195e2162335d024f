"""Database handle shared by the Catalogue and Ordering contexts.

A ``Store`` owns one SQLAlchemy engine and a session factory. It is built
explicitly (usually from ``Settings``) and handed to the stores and services
that need it; nothing in the codebase keeps a process-wide connection.

Every write goes through ``unit_of_work()``: the block runs inside a single
transaction that is committed on exit and rolled back if anything raises.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from shared.config import Settings
from shared.exceptions import DataUnavailableError, PersistenceError
from shared.utils.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Declarative base holding the metadata of every storefront table."""


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):  # noqa: ARG001
    # SQLite ignores FOREIGN KEY clauses (and ON DELETE CASCADE) unless asked
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, echo: bool = False) -> Engine:
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=echo, pool_pre_ping=True)

    options = {"echo": echo, "connect_args": {"check_same_thread": False}}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        # One shared connection, otherwise every checkout sees an empty database
        options["poolclass"] = StaticPool

    engine = create_engine(database_url, **options)
    event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


class Store:
    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.engine = build_engine(database_url, echo=echo)
        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Store":
        return cls(settings.database_url, echo=settings.sql_echo)

    @property
    def dialect(self) -> str:
        return self.engine.dialect.name

    @contextmanager
    def unit_of_work(self) -> Iterator[Session]:
        """Yield a session whose work is committed atomically on exit."""
        session = self._session_factory()
        try:
            with session.begin():
                yield session
        except SQLAlchemyError as exc:
            logger.error("unit_of_work_failed", error=str(exc), dialect=self.dialect)
            raise PersistenceError(str(exc)) from exc
        finally:
            session.close()

    @contextmanager
    def reading(self) -> Iterator[Session]:
        """Yield a session for read-only queries."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as exc:
            logger.error("read_failed", error=str(exc), dialect=self.dialect)
            raise DataUnavailableError(str(exc)) from exc
        finally:
            session.close()

    def ping(self) -> bool:
        try:
            with self.engine.connect() as connection:
                connection.exec_driver_sql("SELECT 1")
        except SQLAlchemyError:
            return False
        return True

    def dispose(self) -> None:
        self.engine.dispose()
