import logging
from pathlib import Path
from typing import Generator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

logger = logging.getLogger(__name__)


class StoreConnectionError(RuntimeError):
    """Raised when the database cannot be reached at startup"""


class Store:
    """
    Owns the SQLAlchemy engine for one database.

    Built once per application by create_app() and shared by every request
    through app.state; sessions are opened per request by get_session().
    """

    def __init__(self, database_url: str, echo: bool = False):
        self.url = make_url(database_url)
        self.is_sqlite = self.url.get_backend_name() == "sqlite"
        self.is_memory = self.is_sqlite and self.url.database in (None, "", ":memory:")

        engine_kwargs = {"echo": echo}
        if self.is_sqlite:
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        if self.is_memory:
            # One shared connection, otherwise each session gets an empty database
            engine_kwargs["poolclass"] = StaticPool

        self.engine: Engine = create_engine(database_url, **engine_kwargs)

    def connect(self) -> None:
        """Open a connection to verify the database is reachable"""
        try:
            if self.is_sqlite and not self.is_memory:
                Path(self.url.database).parent.mkdir(parents=True, exist_ok=True)
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except (OSError, SQLAlchemyError) as e:
            raise StoreConnectionError(f"Failed to connect to the database: {e}") from e

        logger.info("Database connection successful (%s)", self.url.render_as_string(hide_password=True))

    def migrate(self) -> None:
        """Create missing tables and add missing columns for every model"""
        from shop_api.db_schema_patch import auto_migrate

        logger.info("Running migrations...")
        auto_migrate(self.engine)

    def session(self) -> Session:
        return Session(self.engine)

    def dispose(self) -> None:
        self.engine.dispose()


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_session(request: Request) -> Generator[Session, None, None]:
    """Get database session"""
    with get_store(request).session() as session:
        yield session
