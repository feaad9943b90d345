from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vdv_inventory.core.errors import DuplicateId


async def flush_or_raise(db: AsyncSession, message: str, error_cls=DuplicateId):
    """Flush pending changes, turning unique-constraint violations into ``error_cls``."""
    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        raise error_cls(message)


async def commit_or_raise(db: AsyncSession, message: str, error_cls=DuplicateId):
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise error_cls(message)
