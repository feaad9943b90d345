from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from vdv_inventory.auth.dependencies import require_auth
from vdv_inventory.core.constants import HUB_GAME_TYPE, MachineStatus
from vdv_inventory.crud import machine as machine_crud
from vdv_inventory.db import get_db
from vdv_inventory.schemas import (
    BulkUpdateRequest,
    BulkUpdateResult,
    HubGroup,
    MachineCreate,
    MachineRead,
    MachineUpdate,
    QrTokenRead,
    SuccessResponse,
)
from vdv_inventory.services.bulk import bulk_update_machines
from vdv_inventory.services.qr import render_qr_png

router = APIRouter(prefix="/api", tags=["Machines"], dependencies=[Depends(require_auth)])


@router.get("/machines", response_model=List[MachineRead])
async def list_machines(
    status: Optional[MachineStatus] = None,
    store_id: Optional[str] = Query(None, alias="storeId"),
    hub_id: Optional[str] = Query(None, alias="hubId"),
    game_type: Optional[str] = Query(None, alias="gameType"),
    db: AsyncSession = Depends(get_db),
):
    """List machines, most recently updated first"""
    return await machine_crud.get_machines(db, status, store_id, hub_id, game_type)


@router.post("/machines", response_model=MachineRead, status_code=201)
async def create_machine(data: MachineCreate, db: AsyncSession = Depends(get_db)):
    return await machine_crud.create_machine(db, data)


@router.get("/machines/by-hub", response_model=List[HubGroup])
async def machines_by_hub(db: AsyncSession = Depends(get_db)):
    """Machines grouped by hub; machines with no hub come last"""
    groups = await machine_crud.group_machines_by_hub(db)
    ordered = sorted(groups.items(), key=lambda item: (item[0] is None, item[0] or ""))
    return [
        HubGroup(hub_id=hub_id, machines=[MachineRead.model_validate(m) for m in machines])
        for hub_id, machines in ordered
    ]


@router.post("/machines/bulk", response_model=BulkUpdateResult)
async def bulk_update(payload: BulkUpdateRequest, db: AsyncSession = Depends(get_db)):
    """Apply one change to many machines; partial success is reported per id"""
    return await bulk_update_machines(db, payload.ids, payload.changes)


@router.get("/machines/{machine_id}", response_model=MachineRead)
async def get_machine(machine_id: str, db: AsyncSession = Depends(get_db)):
    return await machine_crud.get_machine(db, machine_id)


@router.put("/machines/{machine_id}", response_model=MachineRead)
async def update_machine(machine_id: str, updates: MachineUpdate, db: AsyncSession = Depends(get_db)):
    return await machine_crud.update_machine(db, machine_id, updates)


@router.delete("/machines/{machine_id}", response_model=SuccessResponse)
async def delete_machine(machine_id: str, db: AsyncSession = Depends(get_db)):
    await machine_crud.delete_machine(db, machine_id)
    return SuccessResponse()


@router.post("/machines/{machine_id}/generate-qr", response_model=QrTokenRead)
async def generate_qr(machine_id: str, db: AsyncSession = Depends(get_db)):
    machine = await machine_crud.generate_qr_token(db, machine_id)
    return QrTokenRead(token=machine.qr_token, generated_at=machine.qr_generated_at, url=machine.qr_url)


@router.get("/machines/{machine_id}/qr.png")
async def machine_qr_image(machine_id: str, db: AsyncSession = Depends(get_db)):
    machine = await machine_crud.get_machine(db, machine_id)
    if not machine.qr_token:
        machine = await machine_crud.generate_qr_token(db, machine_id)
    return Response(content=render_qr_png(machine.qr_url), media_type="image/png")


@router.get("/hubs", response_model=List[MachineRead])
async def list_hubs(db: AsyncSession = Depends(get_db)):
    """Hub/gateway devices registered as machines"""
    return await machine_crud.get_hub_devices(db, HUB_GAME_TYPE)
