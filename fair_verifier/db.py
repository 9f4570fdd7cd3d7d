import logging

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from fair_verifier.load_secrets import db_backend
from fair_verifier.models.schemas import Base

if db_backend == "postgres":
    from fair_verifier.create_postgres_engine import engine
else:
    from fair_verifier.create_sqlite_engine import engine

logging.getLogger("aiosqlite").setLevel(logging.WARNING)

# Centralized session factory to avoid creating it in router modules.
Session = async_sessionmaker(
    autocommit=False,
    class_=AsyncSession,
    autoflush=True,
    bind=engine,
)


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Create the credential and admin contact tables if they do not exist"""
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
