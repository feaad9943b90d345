import logging

from sqlalchemy.ext.asyncio import AsyncSession

from vdv_inventory.core.errors import InventoryError, ValidationError
from vdv_inventory.crud import machine as machine_crud
from vdv_inventory.schemas.machine import BulkChanges, BulkFailure, BulkUpdateResult, MachineUpdate

log = logging.getLogger(__name__)


async def bulk_update_machines(db: AsyncSession, ids, changes: BulkChanges) -> BulkUpdateResult:
    """Apply the same change to many machines.

    Each machine is its own transaction: a failure on one id is reported and
    the loop moves on, earlier successes are not rolled back.
    """
    if not ids:
        raise ValidationError("No machines selected")

    fields = changes.model_dump(exclude_unset=True)
    if not fields:
        raise ValidationError("No changes given")
    updates = MachineUpdate(**fields)

    result = BulkUpdateResult()
    for machine_id in dict.fromkeys(ids):
        try:
            await machine_crud.update_machine(db, machine_id, updates)
        except InventoryError as exc:
            await db.rollback()
            log.warning("bulk update skipped machine=%s: %s", machine_id, exc.message)
            result.failed.append(BulkFailure(id=machine_id, error=exc.message))
        else:
            result.updated.append(machine_id)

    log.info("bulk update: %s updated, %s failed", len(result.updated), len(result.failed))
    return result
