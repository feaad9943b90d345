import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import delete, or_, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from vdv_inventory.core.constants import DEFAULT_LOCATION, MachineStatus, TagStatus
from vdv_inventory.core.errors import DuplicateId, NotFound, ValidationError
from vdv_inventory.crud.base import commit_or_raise, flush_or_raise
from vdv_inventory.models import AssetTag, Machine, MaintenanceLog, Store
from vdv_inventory.schemas.machine import MachineCreate, MachineUpdate
from vdv_inventory.utils.security import generate_token

log = logging.getLogger(__name__)

DUPLICATE_MACHINE_MESSAGE = "Machine ID already exists"


async def resolve_store(db: AsyncSession, store_ref: str) -> Store:
    """Find a venue by internal id or by its external store code."""
    result = await db.execute(
        select(Store).where(or_(Store.id == store_ref, Store.store_id == store_ref))
    )
    store = result.scalars().first()
    if not store:
        raise ValidationError(f"Store not found: {store_ref}")
    return store


async def find_machine(db: AsyncSession, machine_ref: str) -> Optional[Machine]:
    """Find a machine by internal id or by its human-assigned machine ID."""
    result = await db.execute(
        select(Machine)
        .where(or_(Machine.id == machine_ref, Machine.machine_id == machine_ref))
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def _machine_id_taken(db: AsyncSession, machine_id: str, exclude_id: Optional[str] = None) -> bool:
    query = select(Machine.id).where(Machine.machine_id == machine_id)
    if exclude_id:
        query = query.where(Machine.id != exclude_id)
    result = await db.execute(query)
    return result.first() is not None


async def get_machines(
    db: AsyncSession,
    status: Optional[MachineStatus] = None,
    store_ref: Optional[str] = None,
    hub_id: Optional[str] = None,
    game_type: Optional[str] = None,
):
    """List machines, most recently updated first"""
    query = select(Machine)

    if status:
        query = query.where(Machine.status == status)
    if store_ref:
        query = query.where(
            Machine.store_id.in_(
                select(Store.id).where(or_(Store.id == store_ref, Store.store_id == store_ref))
            )
        )
    if hub_id:
        query = query.where(Machine.hub_id == hub_id)
    if game_type:
        query = query.where(Machine.game_type == game_type)

    query = query.order_by(Machine.updated_at.desc())
    result = await db.execute(query)
    return result.scalars().all()


async def get_machine(db: AsyncSession, machine_id: str) -> Machine:
    result = await db.execute(
        select(Machine)
        .where(Machine.id == machine_id)
        .execution_options(populate_existing=True)
    )
    machine = result.scalar_one_or_none()
    if not machine:
        raise NotFound("Machine not found")
    return machine


async def get_machine_by_qr_token(db: AsyncSession, token: str) -> Optional[Machine]:
    result = await db.execute(select(Machine).where(Machine.qr_token == token))
    return result.scalar_one_or_none()


async def add_machine(db: AsyncSession, data: MachineCreate) -> Machine:
    """Stage a new machine in the session and flush it; the caller commits."""
    if await _machine_id_taken(db, data.machine_id):
        raise DuplicateId(DUPLICATE_MACHINE_MESSAGE)

    store = await resolve_store(db, data.store_id) if data.store_id else None
    fields = data.model_dump(exclude={"store_id", "credentials", "current_location"})

    machine = Machine(**fields)
    machine.store_id = store.id if store else None
    machine.current_location = data.current_location or (store.name if store else DEFAULT_LOCATION)
    if data.credentials:
        machine.credentials = data.credentials.model_dump(by_alias=True, exclude_none=True)

    db.add(machine)
    await flush_or_raise(db, DUPLICATE_MACHINE_MESSAGE)
    return machine


async def create_machine(db: AsyncSession, data: MachineCreate) -> Machine:
    machine = await add_machine(db, data)
    await commit_or_raise(db, DUPLICATE_MACHINE_MESSAGE)
    log.info("machine created: id=%s machine_id=%s", machine.id, machine.machine_id)
    return await get_machine(db, machine.id)


async def update_machine(db: AsyncSession, machine_id: str, updates: MachineUpdate) -> Machine:
    machine = await get_machine(db, machine_id)

    store = None
    if "store_id" in updates.model_fields_set and updates.store_id:
        store = await resolve_store(db, updates.store_id)

    update_data = updates.model_dump(exclude_unset=True, exclude={"store_id", "credentials"})

    if "machine_id" in update_data:
        if not update_data["machine_id"]:
            raise ValidationError("machineId cannot be empty")
        if await _machine_id_taken(db, update_data["machine_id"], exclude_id=machine.id):
            raise DuplicateId(DUPLICATE_MACHINE_MESSAGE)
    if "status" in update_data and update_data["status"] is None:
        raise ValidationError("status cannot be empty")
    if "current_location" in update_data and not update_data["current_location"]:
        update_data["current_location"] = DEFAULT_LOCATION

    for key, value in update_data.items():
        setattr(machine, key, value)

    if "credentials" in updates.model_fields_set:
        machine.credentials = (
            updates.credentials.model_dump(by_alias=True, exclude_none=True)
            if updates.credentials else None
        )

    if "store_id" in updates.model_fields_set:
        location_given = "current_location" in update_data
        if store:
            machine.store_id = store.id
            if not location_given:
                machine.current_location = store.name
        else:
            machine.store_id = None
            if not location_given:
                machine.current_location = DEFAULT_LOCATION

    machine.updated_at = datetime.utcnow()
    await commit_or_raise(db, DUPLICATE_MACHINE_MESSAGE)
    return await get_machine(db, machine.id)


async def delete_machine(db: AsyncSession, machine_id: str):
    """Hard delete a machine, its maintenance history, and release its asset tag."""
    machine = await get_machine(db, machine_id)

    logs = await db.execute(delete(MaintenanceLog).where(MaintenanceLog.machine_id == machine.id))
    await db.execute(
        update(AssetTag)
        .where(AssetTag.machine_id == machine.id)
        .values(status=TagStatus.unlinked, machine_id=None, linked_at=None)
    )
    await db.delete(machine)
    await db.commit()

    log.info(
        "machine deleted: id=%s machine_id=%s logs_removed=%s",
        machine.id, machine.machine_id, logs.rowcount,
    )
    return machine


async def generate_qr_token(db: AsyncSession, machine_id: str) -> Machine:
    """Issue a fresh QR token; any previously printed code stops resolving."""
    machine = await get_machine(db, machine_id)
    machine.qr_token = generate_token()
    machine.qr_generated_at = datetime.utcnow()
    await commit_or_raise(db, "QR token collision, try again")
    log.info("qr token regenerated: machine=%s", machine.machine_id)
    return machine


async def get_hub_devices(db: AsyncSession, hub_game_type: str):
    result = await db.execute(
        select(Machine).where(Machine.game_type == hub_game_type).order_by(Machine.machine_id)
    )
    return result.scalars().all()


async def group_machines_by_hub(db: AsyncSession):
    """Machines keyed by hub id; machines without a hub are grouped under None."""
    machines = await get_machines(db)
    groups = {}
    for machine in machines:
        groups.setdefault(machine.hub_id, []).append(machine)
    return groups
