from typing import AsyncIterator
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def build_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables(engine: AsyncEngine) -> None:
    # Register all tables on Base.metadata before create_all
    import lawvault.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """
    FastAPI dependency yielding one session per request.

    The session factory lives on ``app.state`` (set up once by ``create_app``),
    so handlers never touch module-level connection globals. The unit of work
    is committed when the handler returns and rolled back if it raises.
    """
    session_factory: async_sessionmaker = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
