"""Database configuration and session management."""

import logging
from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from expense_tracker.config import get_settings
from expense_tracker.exceptions import StartupError

logger = logging.getLogger(__name__)

settings = get_settings()


def create_db_engine(database_url: str) -> Engine:
    """Create an engine with a bounded connection pool."""
    if database_url.startswith("sqlite"):
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
    )


engine = create_db_engine(settings.sqlalchemy_database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base: Any = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _server_default_sql(column, dialect) -> str | None:
    """Render a column's server default as SQL, or None when it has none."""
    if column.server_default is None:
        return None
    default = column.server_default.arg
    if isinstance(default, str):
        return "'" + default.replace("'", "''") + "'"
    return str(default.compile(dialect=dialect))


def add_missing_columns(bind: Engine) -> list[str]:
    """Add model columns that are missing from existing tables.

    Older deployments created ``expenses`` without ``user_id``. Columns are
    added as nullable so existing rows are kept. A column with a server
    default gets that default for new rows (SQLite only allows constant
    defaults in ``ADD COLUMN``, so there the model's insert-time default
    covers new rows) and existing rows are backfilled with it.
    Returns the ``table.column`` names that were added.
    """
    inspector = inspect(bind)
    existing_tables = set(inspector.get_table_names())
    added = []

    with bind.begin() as conn:
        for table in Base.metadata.sorted_tables:
            if table.name not in existing_tables:
                continue
            existing_columns = {col["name"] for col in inspector.get_columns(table.name)}
            for column in table.columns:
                if column.name in existing_columns:
                    continue
                column_sql = f'"{column.name}" {column.type.compile(dialect=bind.dialect)}'
                default_sql = _server_default_sql(column, bind.dialect)
                if default_sql and bind.dialect.name != "sqlite":
                    column_sql += f" DEFAULT {default_sql}"
                conn.execute(text(f"ALTER TABLE {table.name} ADD COLUMN {column_sql}"))
                if default_sql:
                    conn.execute(
                        text(
                            f'UPDATE {table.name} SET "{column.name}" = {default_sql} '
                            f'WHERE "{column.name}" IS NULL'
                        )
                    )
                added.append(f"{table.name}.{column.name}")
                logger.warning(
                    f"Added missing column {table.name}.{column.name}; existing rows have it "
                    f"set to {default_sql or 'NULL'}"
                )

    return added


def init_db(bind: Engine | None = None) -> None:
    """Initialize the database by creating missing tables and columns.

    Raises StartupError when the database cannot be reached or changed.
    """
    # Import all models here so they are registered with Base.metadata
    from expense_tracker import models  # noqa: F401

    bind = bind or engine
    try:
        Base.metadata.create_all(bind=bind)
        add_missing_columns(bind)
    except SQLAlchemyError as e:
        raise StartupError(f"Database initialization failed: {e}") from e
    logger.info("Database tables are ready")
