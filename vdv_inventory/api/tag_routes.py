from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from vdv_inventory.auth.dependencies import require_auth
from vdv_inventory.core.constants import TagStatus
from vdv_inventory.crud import asset_tag as tag_crud
from vdv_inventory.db import get_db
from vdv_inventory.schemas import (
    AssetTagRead,
    MachineCreate,
    MachineRead,
    TagGenerateRequest,
    TagLinkRequest,
)
from vdv_inventory.services.qr import render_qr_png

router = APIRouter(prefix="/api/tags", tags=["Asset Tags"], dependencies=[Depends(require_auth)])


@router.get("", response_model=List[AssetTagRead])
async def list_tags(status: Optional[TagStatus] = None, db: AsyncSession = Depends(get_db)):
    return await tag_crud.get_tags(db, status)


@router.post("/generate", response_model=List[AssetTagRead], status_code=201)
async def generate_tags(payload: TagGenerateRequest, db: AsyncSession = Depends(get_db)):
    """Pre-generate a batch of unlinked tags for printing"""
    return await tag_crud.generate_batch(db, payload.count)


@router.get("/{token}/qr.png")
async def tag_qr_image(token: str, db: AsyncSession = Depends(get_db)):
    tag = await tag_crud.get_tag(db, token)
    return Response(content=render_qr_png(tag.scan_url), media_type="image/png")


@router.post("/{token}/link", response_model=AssetTagRead)
async def link_tag(token: str, payload: TagLinkRequest, db: AsyncSession = Depends(get_db)):
    return await tag_crud.link_tag(db, token, payload.machine_id)


@router.post("/{token}/unlink", response_model=AssetTagRead)
async def unlink_tag(token: str, db: AsyncSession = Depends(get_db)):
    return await tag_crud.unlink_tag(db, token)


@router.post("/{token}/create-machine", response_model=MachineRead, status_code=201)
async def create_machine_from_tag(token: str, data: MachineCreate, db: AsyncSession = Depends(get_db)):
    """Register a new machine straight from a scanned, unused sticker"""
    return await tag_crud.create_machine_with_tag(db, token, data)
