from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vdv_inventory.auth.dependencies import optional_auth
from vdv_inventory.crud import asset_tag as tag_crud
from vdv_inventory.db import get_db
from vdv_inventory.schemas import TagView

# 🌐 QR scan landing lookups: no login required
router = APIRouter(tags=["Public"])


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.get("/api/machines/by-token/{token}", response_model=TagView, response_model_exclude_none=True)
async def machine_by_token(
    token: str,
    authenticated: bool = Depends(optional_auth),
    db: AsyncSession = Depends(get_db),
):
    return await tag_crud.get_tag_view(db, token, include_credentials=authenticated)


@router.get("/api/tags/{token}", response_model=TagView, response_model_exclude_none=True)
async def tag_by_token(
    token: str,
    authenticated: bool = Depends(optional_auth),
    db: AsyncSession = Depends(get_db),
):
    return await tag_crud.get_tag_view(db, token, include_credentials=authenticated)
