import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from vdv_inventory.core.constants import DEFAULT_LOCATION
from vdv_inventory.core.errors import DuplicateId, NotFound, ValidationError
from vdv_inventory.crud.base import commit_or_raise
from vdv_inventory.models import Machine, Store
from vdv_inventory.schemas.store import StoreCreate, StoreUpdate

log = logging.getLogger(__name__)

DUPLICATE_STORE_MESSAGE = "Store ID already exists"


async def _store_id_taken(db: AsyncSession, store_id: str, exclude_id: Optional[str] = None) -> bool:
    query = select(Store.id).where(Store.store_id == store_id)
    if exclude_id:
        query = query.where(Store.id != exclude_id)
    result = await db.execute(query)
    return result.first() is not None


async def get_stores(db: AsyncSession):
    result = await db.execute(select(Store).order_by(Store.name))
    return result.scalars().all()


async def get_store(db: AsyncSession, store_id: str) -> Store:
    result = await db.execute(
        select(Store).where(Store.id == store_id).execution_options(populate_existing=True)
    )
    store = result.scalar_one_or_none()
    if not store:
        raise NotFound("Store not found")
    return store


async def get_store_machines(db: AsyncSession, store_id: str):
    result = await db.execute(
        select(Machine)
        .where(Machine.store_id == store_id)
        .order_by(Machine.machine_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().all()


async def create_store(db: AsyncSession, data: StoreCreate) -> Store:
    if await _store_id_taken(db, data.store_id):
        raise DuplicateId(DUPLICATE_STORE_MESSAGE)

    store = Store(**data.model_dump())
    db.add(store)
    await commit_or_raise(db, DUPLICATE_STORE_MESSAGE)
    log.info("store created: id=%s store_id=%s", store.id, store.store_id)
    return store


async def update_store(db: AsyncSession, store_id: str, updates: StoreUpdate) -> Store:
    store = await get_store(db, store_id)
    update_data = updates.model_dump(exclude_unset=True)

    for field in ("store_id", "name"):
        if field in update_data and not update_data[field]:
            raise ValidationError(f"{field} cannot be empty")
    if "store_id" in update_data and await _store_id_taken(db, update_data["store_id"], exclude_id=store.id):
        raise DuplicateId(DUPLICATE_STORE_MESSAGE)

    old_name = store.name
    for key, value in update_data.items():
        setattr(store, key, value)
    store.updated_at = datetime.utcnow()

    if store.name != old_name:
        # Machines still showing the venue name as their location follow the rename
        result = await db.execute(
            update(Machine)
            .where(Machine.store_id == store.id, Machine.current_location == old_name)
            .values(current_location=store.name, updated_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        log.info("store renamed: id=%s machines_relocated=%s", store.id, result.rowcount)

    await commit_or_raise(db, DUPLICATE_STORE_MESSAGE)
    return await get_store(db, store.id)


async def delete_store(db: AsyncSession, store_id: str) -> int:
    """Delete a venue and send its machines back to the warehouse.

    Both writes share one transaction, so no machine is ever left pointing
    at a deleted venue. Returns the number of machines unassigned.
    """
    store = await get_store(db, store_id)

    result = await db.execute(
        update(Machine)
        .where(Machine.store_id == store.id)
        .values(store_id=None, current_location=DEFAULT_LOCATION, updated_at=datetime.utcnow())
        .execution_options(synchronize_session=False)
    )
    await db.delete(store)
    await db.commit()

    log.info(
        "store deleted: id=%s store_id=%s machines_unassigned=%s",
        store.id, store.store_id, result.rowcount,
    )
    return result.rowcount
