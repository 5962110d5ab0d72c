"""
Database configuration and session management
"""
from typing import Optional
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from gaitlab.config import settings
from gaitlab.logger import logger
from pathlib import Path

# Base class for models
Base = declarative_base()


def build_engine(url: str, echo: bool = False, **kwargs) -> Engine:
    """
    Create a synchronous engine for the given URL

    Each thread gets its own connection from the pool; route handlers run
    store calls in worker threads.

    Args:
        url: SQLAlchemy database URL
        echo: Log emitted SQL
        **kwargs: Extra create_engine arguments (e.g. poolclass for tests)

    Returns:
        Engine
    """
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        # Create database directory if it doesn't exist
        db_file = url.split("///", 1)[-1]
        if db_file and db_file != ":memory:" and "///" in url:
            Path(db_file).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(
        url,
        echo=echo,
        pool_pre_ping=True,  # Verify connections before using
        connect_args=connect_args,
        **kwargs
    )

    if url.startswith("sqlite"):
        # pysqlite emits its own BEGIN lazily, which breaks SAVEPOINT; let
        # SQLAlchemy own the transaction instead
        @event.listens_for(engine, "connect")
        def _disable_pysqlite_transactions(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None

        @event.listens_for(engine, "begin")
        def _emit_begin(conn):
            conn.exec_driver_sql("BEGIN")

    return engine


def build_session_factory(bind: Engine) -> sessionmaker:
    """Create a session factory bound to an engine"""
    return sessionmaker(
        bind=bind,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


engine = build_engine(settings.DATABASE.url, echo=settings.DATABASE.echo)
SessionLocal = build_session_factory(engine)


def init_db(bind: Optional[Engine] = None):
    """Create tables and indexes"""
    # Register models on Base.metadata
    from gaitlab.models import experiment_session, gait_reading  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables initialized")


def close_db(bind: Optional[Engine] = None):
    """Close database connections"""
    (bind or engine).dispose()
    logger.info("Database connections closed")
