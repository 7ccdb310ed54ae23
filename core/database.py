"""
Database session management with SQLAlchemy async over SQLite
"""

from pathlib import Path
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, AsyncSession, async_sessionmaker
from core.config import settings
import logging

logger = logging.getLogger(__name__)


def _ensure_sqlite_directory(database_url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    url = make_url(database_url)
    if not url.drivername.startswith("sqlite"):
        return
    database = url.database
    if database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)


def _set_sqlite_pragmas(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine with WAL journaling and foreign keys enforced.

    Args:
        database_url: SQLAlchemy URL, e.g. sqlite+aiosqlite:///./data/app.db
        echo: Log emitted SQL
    """
    _ensure_sqlite_directory(database_url)
    engine = create_async_engine(
        database_url,
        echo=echo,
        connect_args={"timeout": 30},
        future=True
    )
    event.listen(engine.sync_engine, "connect", _set_sqlite_pragmas)
    return engine


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False
    )


# Create async engine
engine = create_engine(settings.DATABASE_URL)

# Create session factory
async_session_maker = create_session_maker(engine)


async def init_db(db_engine: AsyncEngine = engine) -> None:
    """
    Create all tables and pre-seed the tracked institutions.

    Failure here is fatal to the process; callers should let it propagate.
    """
    # Imported here so every model is registered on Base.metadata
    from models import Base
    from ingestion.loaders.sqlite_loader import SQLiteLoader
    from ingestion.sample_data import TRACKED_INSTITUTIONS

    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = create_session_maker(db_engine)
    async with session_maker() as session:
        loader = SQLiteLoader(session)
        for institution in TRACKED_INSTITUTIONS:
            await loader.upsert_institution(institution.cik, institution.name)
        await session.commit()

    logger.info(f"Database initialized ({len(TRACKED_INSTITUTIONS)} tracked institutions)")
