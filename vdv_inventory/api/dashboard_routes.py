from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from vdv_inventory.auth.dependencies import require_auth
from vdv_inventory.core.constants import MachineStatus
from vdv_inventory.crud import machine as machine_crud
from vdv_inventory.db import get_db
from vdv_inventory.schemas import DashboardStats, MachineRead, VenueOverview
from vdv_inventory.services import dashboard

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"], dependencies=[Depends(require_auth)])


@router.get("/stats", response_model=DashboardStats)
async def stats(db: AsyncSession = Depends(get_db)):
    return await dashboard.get_stats(db)


@router.get("/machines", response_model=List[MachineRead])
async def machine_list(
    search: str = "",
    status: Optional[MachineStatus] = None,
    sort: str = "updatedAt",
    order: str = "desc",
    db: AsyncSession = Depends(get_db),
):
    """Searchable, sortable machine table"""
    view = dashboard.MachineListView(search=search, status=status, sort=sort, order=order)
    return view.apply(await machine_crud.get_machines(db))


@router.get("/venues", response_model=VenueOverview)
async def venues(db: AsyncSession = Depends(get_db)):
    return await dashboard.get_venue_overview(db)
