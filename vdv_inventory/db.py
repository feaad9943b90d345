from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from vdv_inventory.core.config import settings
from vdv_inventory.models.base import Base

engine = create_async_engine(settings.database_url, echo=settings.sql_echo)

# Objects stay readable after commit; response models serialize them afterwards
async_session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db():
    """One session per request."""
    async with async_session() as session:
        yield session


async def create_db_and_tables():
    import vdv_inventory.models  # noqa: F401  registers every table on Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
