import ssl

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from billbook.core.config import settings
from billbook.infrastructure.db.base import Base


def _connect_args(url: str) -> dict:
    # Hosted Postgres (Neon etc.) needs TLS; sqlite takes no connect args
    if url.startswith("postgresql+asyncpg"):
        return {"ssl": ssl.create_default_context()}
    return {}


engine = create_async_engine(
    settings.DATABASE_URL,
    echo=False,
    future=True,
    connect_args=_connect_args(settings.DATABASE_URL),
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def init_models() -> None:
    # Import models so their tables are registered on Base.metadata
    from billbook.infrastructure.db import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db():
    async with AsyncSessionLocal() as session:
        yield session
