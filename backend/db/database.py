from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from core.config import get_settings


class Base(DeclarativeBase):
    pass


def _engine_options(database_url: str) -> dict:
    # SQLite connections are cheap and should not outlive the event loop that opened them
    if database_url.startswith("sqlite"):
        return {"poolclass": NullPool}
    return {"pool_pre_ping": True}


settings = get_settings()
engine = create_async_engine(
    settings.database_url,
    echo=settings.database_echo,
    **_engine_options(settings.database_url),
)
async_session_maker = async_sessionmaker(engine, expire_on_commit=False)


def _import_models():
    # Registers every table on Base.metadata
    from db.consumed_token import ConsumedToken  # noqa: F401
    from db.inventory.item import InventoryItem  # noqa: F401
    from db.recipe import Recipe  # noqa: F401
    from db.sku_sequence import SkuSequence  # noqa: F401
    from db.users import User  # noqa: F401


async def create_db_and_tables():
    _import_models()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_db_and_tables():
    _import_models()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_maker() as session:
        yield session
