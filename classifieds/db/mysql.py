"""Database connection and session management.

This module provides the SQLAlchemy engine shared by the SQL DAOs, the session
factory used by the ORM DAOs, and helpers for schema bootstrap.

Usage:
    from classifieds.db.mysql import engine, get_db_session

    with get_db_session() as db:
        db.execute(select(Country))
"""

from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from classifieds.settings import settings
from classifieds.utils import get_logger

logger = get_logger(__name__)


def _build_database_url() -> str:
    """Build database connection URL from settings.

    Returns:
        Database connection URL in SQLAlchemy format
    """
    url = settings.get_database_url_auto()

    # Convert mysql:// to mysql+pymysql:// if needed
    if url.startswith("mysql://"):
        url = url.replace("mysql://", "mysql+pymysql://", 1)

    return url


def build_engine(database_url: str, **overrides) -> Engine:
    """Create an engine configured for the given backend.

    SQLite engines get foreign-key enforcement switched on per connection;
    MySQL engines get a pooled configuration and a session wait timeout.

    Args:
        database_url: SQLAlchemy URL
        **overrides: Extra create_engine keyword arguments

    Returns:
        Configured engine
    """
    is_sqlite = database_url.startswith("sqlite")
    engine_kwargs = {"echo": settings.debug and settings.environment == "local-dev"}

    if is_sqlite:
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    else:
        engine_kwargs.update(
            {
                "pool_size": settings.mysql_pool_size,
                "max_overflow": settings.mysql_max_overflow,
                "pool_pre_ping": settings.mysql_pool_pre_ping,
                "pool_recycle": 3600,  # Recycle connections after 1 hour
            }
        )
    engine_kwargs.update(overrides)

    new_engine = create_engine(database_url, **engine_kwargs)

    if is_sqlite:

        @event.listens_for(new_engine, "connect")
        def enable_foreign_keys(dbapi_connection, connection_record):
            """SQLite ignores FOREIGN KEY clauses unless told otherwise."""
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    else:

        @event.listens_for(new_engine, "connect")
        def set_connection_timeout(dbapi_connection, connection_record):
            """Set connection timeout for MySQL."""
            cursor = dbapi_connection.cursor()
            cursor.execute("SET SESSION wait_timeout = 28800")  # 8 hours
            cursor.close()

    return new_engine


def build_session_factory(bind: Engine) -> sessionmaker:
    """Session factory for the ORM DAOs.

    Objects stay loaded after commit so DAOs can hand them back detached.
    """
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=bind,
    )


_database_url = _build_database_url()

if _database_url.startswith("sqlite"):
    logger.info(f"Using SQLite database: {_database_url}")
else:
    logger.info(f"Using MySQL database: {_database_url.split('@')[1] if '@' in _database_url else 'unknown'}")

engine: Engine = build_engine(_database_url)

SessionLocal = build_session_factory(engine)


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """Get database session as context manager.

    Usage:
        with get_db_session() as db:
            db.execute(select(Country))
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def check_connection(bind: Engine | None = None) -> bool:
    """Check if database connection is working.

    Returns:
        True if connection is successful, False otherwise
    """
    try:
        with (bind or engine).connect() as conn:
            conn.execute(text("SELECT 1"))
            return True
    except Exception as e:
        logger.error(f"Database connection check failed: {e}")
        return False


def init_db(bind: Engine | None = None) -> None:
    """Create all tables that do not exist yet."""
    from classifieds.db.models import Base

    try:
        Base.metadata.create_all(bind=bind or engine)
        logger.info("Database tables initialized")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise


def close_db() -> None:
    """Dispose of pooled connections."""
    engine.dispose()
    logger.info("Database connections closed")
