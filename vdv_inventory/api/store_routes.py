from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from vdv_inventory.auth.dependencies import require_auth
from vdv_inventory.crud import store as store_crud
from vdv_inventory.db import get_db
from vdv_inventory.schemas import (
    MachineRead,
    StoreCreate,
    StoreDetail,
    StoreRead,
    StoreUpdate,
    SuccessResponse,
)

router = APIRouter(prefix="/api/stores", tags=["Stores"], dependencies=[Depends(require_auth)])


@router.get("", response_model=List[StoreRead])
async def list_stores(db: AsyncSession = Depends(get_db)):
    return await store_crud.get_stores(db)


@router.post("", response_model=StoreRead, status_code=201)
async def create_store(data: StoreCreate, db: AsyncSession = Depends(get_db)):
    return await store_crud.create_store(db, data)


@router.get("/{store_id}", response_model=StoreDetail)
async def get_store(store_id: str, db: AsyncSession = Depends(get_db)):
    """Venue merged with the machines currently assigned to it"""
    store = await store_crud.get_store(db, store_id)
    machines = await store_crud.get_store_machines(db, store.id)
    return StoreDetail(
        **StoreRead.model_validate(store).model_dump(),
        machines=[MachineRead.model_validate(m) for m in machines],
    )


@router.put("/{store_id}", response_model=StoreRead)
async def update_store(store_id: str, updates: StoreUpdate, db: AsyncSession = Depends(get_db)):
    return await store_crud.update_store(db, store_id, updates)


@router.delete("/{store_id}", response_model=SuccessResponse)
async def delete_store(store_id: str, db: AsyncSession = Depends(get_db)):
    await store_crud.delete_store(db, store_id)
    return SuccessResponse()
