"""Database session configuration."""

from typing import Any, AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from familytree.core.config import settings


def _engine_kwargs(url: str) -> dict[str, Any]:
    if url.startswith("sqlite"):
        # SQLite has no server-side pool; one connection per session is enough.
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_POOL_MAX_OVERFLOW,
        "pool_pre_ping": True,
        "pool_recycle": 300,  # Recycle connections after 5 minutes
        "pool_timeout": 30,  # Wait up to 30 seconds for a connection
    }


def _configure_sqlite(engine: AsyncEngine) -> None:
    """Make SQLite honour foreign keys and savepoints.

    The driver's own transaction handling defers BEGIN and breaks SAVEPOINT,
    so it is switched off and SQLAlchemy emits BEGIN itself.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):  # noqa: ANN001
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):  # noqa: ANN001
        conn.exec_driver_sql("BEGIN")


def build_engine(url: str, *, echo: bool = False) -> AsyncEngine:
    """Create an async engine for ``url`` with the pool and dialect setup it needs."""
    engine = create_async_engine(url, echo=echo, **_engine_kwargs(url))
    if url.startswith("sqlite"):
        _configure_sqlite(engine)
    return engine


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory whose objects stay loaded after commit."""
    return async_sessionmaker(
        autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
    )


async_engine = build_engine(settings.SQLALCHEMY_ASYNC_DATABASE_URI, echo=settings.DB_ECHO)

AsyncSessionLocal = build_session_factory(async_engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session to be used in dependency injection.

    Yields:
    ------
        AsyncSession: An async database session

    """
    async with AsyncSessionLocal() as db:
        yield db
