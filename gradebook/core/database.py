from sqlalchemy import create_engine, event, text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool
from .config import settings
import logging

logger = logging.getLogger(__name__)

# =============================================================================
# DATABASE ENGINE CONFIGURATION
# =============================================================================


def build_engine(url: str):
    """
    Create the process-wide engine for ``url``.

    Server databases get a tuned QueuePool; SQLite only needs to allow its
    connections to cross threads.
    """
    if url.startswith("sqlite"):
        return create_engine(
            url,
            echo=settings.DB_ECHO_SQL,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        url,

        # Connection pool settings
        poolclass=QueuePool,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,

        # Detect dropped connections before handing them out
        pool_pre_ping=True,

        echo=settings.DB_ECHO_SQL,
        connect_args={
            "connect_timeout": 10,
        }
    )


engine = build_engine(settings.DATABASE_URL)


# =============================================================================
# SESSION CONFIGURATION
# =============================================================================

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False
)

Base = declarative_base()


# =============================================================================
# STORE FAILURE CLASSIFICATION
# =============================================================================

# SQLSTATE codes (PostgreSQL)
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


def _driver_error(exc: Exception):
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return exc.orig
    return exc


def _sqlstate(exc: Exception):
    orig = _driver_error(exc)
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def is_unique_violation(exc: Exception) -> bool:
    """Does this failure represent a uniqueness violation?"""
    if _sqlstate(exc) == UNIQUE_VIOLATION:
        return True
    return "UNIQUE constraint failed" in str(_driver_error(exc))


def is_foreign_key_violation(exc: Exception) -> bool:
    """Does this failure represent a missing parent row?"""
    if _sqlstate(exc) == FOREIGN_KEY_VIOLATION:
        return True
    return "FOREIGN KEY constraint failed" in str(_driver_error(exc))


# =============================================================================
# DATABASE UTILITIES
# =============================================================================

def create_database_tables():
    """
    Create every table, constraint and index that does not exist yet.

    Existing tables and their rows are left untouched.
    """
    # Registers the models on Base.metadata
    from gradebook.models import student, grade  # noqa: F401

    logger.info("Creating database tables (if absent)...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")


def drop_database_tables():
    """
    Drop all database tables.

    DANGER: this deletes all data!
    """
    from gradebook.models import student, grade  # noqa: F401

    logger.warning("!!! DROPPING ALL DATABASE TABLES - every student and grade will be lost !!!")
    Base.metadata.drop_all(bind=engine)
    logger.warning("Database tables dropped")


def check_database_connection() -> bool:
    """
    Check if database connection is working.

    Returns:
        bool: True if connection successful, False otherwise
    """
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


# =============================================================================
# EVENT LISTENERS
# =============================================================================

@event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """
    SQLite ignores foreign keys (and ON DELETE CASCADE) unless asked per connection.
    """
    if engine.dialect.name == "sqlite":
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# =============================================================================
# INITIALIZATION
# =============================================================================

def init_db(reset: bool = False):
    """
    Initialize database. Run this before serving any request.

    Raises RuntimeError when the store is unreachable or the schema cannot
    be created; callers must not start serving in that case.
    """
    logger.info("Initializing database...")

    if not check_database_connection():
        raise RuntimeError("Cannot connect to database!")

    try:
        if reset:
            drop_database_tables()
        create_database_tables()
    except Exception as e:
        raise RuntimeError(f"Schema initialization failed: {e}") from e

    logger.info("Database initialized successfully")


def dispose_engine():
    """Release every pooled connection."""
    engine.dispose()
    logger.info("Database connection pool released")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    from .config import print_config
    print_config()

    if check_database_connection():
        print("Connection successful!")
    else:
        print("Connection failed!")
