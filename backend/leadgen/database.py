"""
Async PostgreSQL access for leads, persona insights and campaign logs.

One engine per process; request handlers get a session through `get_db`.
"""

import logging
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base

from leadgen.config import settings

logger = logging.getLogger(__name__)

ASYNC_DRIVER = "postgresql+asyncpg"


def async_database_url(url: str) -> str:
    """
    Point a plain Postgres URL at the asyncpg driver.

    postgres:// and postgresql:// are rewritten; URLs that already name a
    driver (or another database) are returned unchanged.
    """
    scheme, sep, rest = url.partition("://")
    if sep and scheme in ("postgres", "postgresql"):
        return f"{ASYNC_DRIVER}://{rest}"
    return url


engine = create_async_engine(
    async_database_url(settings.DATABASE_URL),
    echo=settings.LOG_LEVEL == "DEBUG",
    pool_pre_ping=True,
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

Base = declarative_base()


async def get_db():
    """Session per request; rolled back if the handler raises."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def check_connection() -> bool:
    """
    Run a trivial query so a bad DATABASE_URL shows up in the startup log.

    Never raises; the API still starts without a database.
    """
    try:
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT NOW()"))
            logger.info(f"✅ Connected to PostgreSQL at {result.scalar()}")
            return True
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"❌ Database connection failed: {e}")
        return False
