import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from vdv_inventory.core.constants import MaintenanceType
from vdv_inventory.core.errors import NotFound, ValidationError
from vdv_inventory.crud.machine import find_machine
from vdv_inventory.models import Machine, MaintenanceLog
from vdv_inventory.schemas.maintenance import MaintenanceLogCreate, MaintenanceLogUpdate

log = logging.getLogger(__name__)


def _clean_parts(parts):
    return [p.strip() for p in parts or [] if p and p.strip()]


async def _require_machine(db: AsyncSession, machine_ref: str) -> Machine:
    machine = await find_machine(db, machine_ref)
    if not machine:
        raise ValidationError(f"Machine not found: {machine_ref}")
    return machine


async def get_logs(
    db: AsyncSession,
    machine_ref: Optional[str] = None,
    log_type: Optional[MaintenanceType] = None,
):
    """Maintenance history, newest service date first"""
    query = select(MaintenanceLog)

    if machine_ref:
        query = query.where(
            MaintenanceLog.machine_id.in_(
                select(Machine.id).where(or_(Machine.id == machine_ref, Machine.machine_id == machine_ref))
            )
        )
    if log_type:
        query = query.where(MaintenanceLog.type == log_type)

    result = await db.execute(query.order_by(MaintenanceLog.date.desc()))
    return result.scalars().all()


async def get_log(db: AsyncSession, log_id: str) -> MaintenanceLog:
    result = await db.execute(
        select(MaintenanceLog)
        .where(MaintenanceLog.id == log_id)
        .execution_options(populate_existing=True)
    )
    entry = result.scalar_one_or_none()
    if not entry:
        raise NotFound("Log not found")
    return entry


async def create_log(db: AsyncSession, data: MaintenanceLogCreate) -> MaintenanceLog:
    machine = await _require_machine(db, data.machine_id)

    entry = MaintenanceLog(
        machine_id=machine.id,
        date=data.date or datetime.utcnow(),
        technician=data.technician,
        type=data.type,
        description=data.description,
        cost=data.cost,
    )
    entry.parts_replaced = _clean_parts(data.parts_replaced)
    db.add(entry)
    await db.commit()

    log.info("maintenance logged: id=%s machine=%s type=%s", entry.id, machine.machine_id, entry.type.value)
    return await get_log(db, entry.id)


async def update_log(db: AsyncSession, log_id: str, updates: MaintenanceLogUpdate) -> MaintenanceLog:
    entry = await get_log(db, log_id)
    update_data = updates.model_dump(exclude_unset=True, exclude={"machine_id", "parts_replaced"})

    for field in ("date", "technician", "type", "description"):
        if field in update_data and update_data[field] is None:
            raise ValidationError(f"{field} is required")

    if "machine_id" in updates.model_fields_set:
        if not updates.machine_id:
            raise ValidationError("machineId is required")
        machine = await _require_machine(db, updates.machine_id)
        entry.machine_id = machine.id

    for key, value in update_data.items():
        setattr(entry, key, value)

    if "parts_replaced" in updates.model_fields_set:
        entry.parts_replaced = _clean_parts(updates.parts_replaced)

    entry.updated_at = datetime.utcnow()
    await db.commit()
    return await get_log(db, entry.id)


async def delete_log(db: AsyncSession, log_id: str):
    entry = await get_log(db, log_id)
    await db.delete(entry)
    await db.commit()
    log.info("maintenance log deleted: id=%s", entry.id)
    return entry
