from pydantic import Field
from typing import Optional
from datetime import datetime

from vdv_inventory.core.constants import TagStatus
from vdv_inventory.schemas.common import CamelModel, RequiredStr
from vdv_inventory.schemas.machine import MachinePublicView, MachineSummary


class TagGenerateRequest(CamelModel):
    count: int


class TagLinkRequest(CamelModel):
    machine_id: RequiredStr  # internal machine id or human machine code


class AssetTagRead(CamelModel):
    id: str = Field(alias="_id")
    token: str
    status: TagStatus
    machine_id: Optional[str] = None
    machine: Optional[MachineSummary] = None
    scan_url: str
    created_at: datetime
    linked_at: Optional[datetime] = None


class TagView(CamelModel):
    """What a QR scan resolves to: tag state plus the public machine view."""

    token: str
    status: TagStatus
    linked_at: Optional[datetime] = None
    machine: Optional[MachinePublicView] = None
