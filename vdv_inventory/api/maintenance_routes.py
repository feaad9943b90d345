from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from vdv_inventory.auth.dependencies import require_auth
from vdv_inventory.core.constants import MaintenanceType
from vdv_inventory.crud import maintenance as maintenance_crud
from vdv_inventory.db import get_db
from vdv_inventory.schemas import (
    MaintenanceLogCreate,
    MaintenanceLogRead,
    MaintenanceLogUpdate,
    SuccessResponse,
)

router = APIRouter(prefix="/api/maintenance", tags=["Maintenance"], dependencies=[Depends(require_auth)])


@router.get("", response_model=List[MaintenanceLogRead])
async def list_logs(
    machine_id: Optional[str] = Query(None, alias="machineId"),
    type: Optional[MaintenanceType] = None,
    db: AsyncSession = Depends(get_db),
):
    return await maintenance_crud.get_logs(db, machine_id, type)


@router.post("", response_model=MaintenanceLogRead, status_code=201)
async def create_log(data: MaintenanceLogCreate, db: AsyncSession = Depends(get_db)):
    return await maintenance_crud.create_log(db, data)


@router.get("/{log_id}", response_model=MaintenanceLogRead)
async def get_log(log_id: str, db: AsyncSession = Depends(get_db)):
    return await maintenance_crud.get_log(db, log_id)


@router.put("/{log_id}", response_model=MaintenanceLogRead)
async def update_log(log_id: str, updates: MaintenanceLogUpdate, db: AsyncSession = Depends(get_db)):
    return await maintenance_crud.update_log(db, log_id, updates)


@router.delete("/{log_id}", response_model=SuccessResponse)
async def delete_log(log_id: str, db: AsyncSession = Depends(get_db)):
    await maintenance_crud.delete_log(db, log_id)
    return SuccessResponse()
