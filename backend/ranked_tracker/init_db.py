"""Database initialization script using SQLAlchemy create_all().

Creates the ``players``, ``player_history`` and ``lp_tracker`` tables.

Usage:
    python -m ranked_tracker.init_db [init|drop|reset]
"""

import asyncio
import sys
from typing import NoReturn, Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError

from ranked_tracker.core.database import DatabaseManager
from ranked_tracker.core.logging import setup_logging
from ranked_tracker.core.models import Base

# Registers the tables on Base.metadata
from ranked_tracker.features.players import orm_models  # noqa: F401

logger = structlog.get_logger(__name__)


async def init_db(database: Optional[DatabaseManager] = None) -> None:
    """Create every table defined on ``Base.metadata``.

    :param database: Database manager (a fresh one from settings when omitted)
    :raises SQLAlchemyError: If database connection or table creation fails
    """
    database = database or DatabaseManager()
    try:
        async with database.engine.begin() as conn:
            logger.info("Creating database tables...")
            await conn.run_sync(Base.metadata.create_all)

        logger.info(
            "Database initialization completed successfully",
            table_names=list(Base.metadata.tables.keys()),
        )
    except SQLAlchemyError as e:
        logger.error(
            "Database initialization failed",
            error=str(e),
            error_type=type(e).__name__,
        )
        raise
    finally:
        await database.close()


async def drop_all_tables(database: Optional[DatabaseManager] = None) -> None:
    """Drop all tables from the database.

    WARNING: This is destructive and will delete all data!
    """
    database = database or DatabaseManager()
    try:
        logger.warning("Dropping all database tables...")
        async with database.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.info("All database tables dropped successfully")
    except SQLAlchemyError as e:
        logger.error(
            "Failed to drop database tables",
            error=str(e),
            error_type=type(e).__name__,
        )
        raise
    finally:
        await database.close()


async def reset_db() -> None:
    """Drop and recreate all tables (destructive)."""
    logger.warning("Resetting database (drop + create)...")
    await drop_all_tables()
    await init_db()
    logger.info("Database reset completed successfully")


def main() -> NoReturn:
    """Run CLI for database initialization commands."""
    setup_logging()
    command = sys.argv[1] if len(sys.argv) > 1 else "init"

    if command == "init":
        asyncio.run(init_db())
    elif command == "drop":
        asyncio.run(drop_all_tables())
    elif command == "reset":
        asyncio.run(reset_db())
    else:
        logger.error("Unknown command", command=command)
        print("Usage: python -m ranked_tracker.init_db [init|drop|reset]")
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
