from pydantic import Field
from typing import Any, Dict, List, Optional
from datetime import date, datetime

from vdv_inventory.core.constants import MachineStatus
from vdv_inventory.schemas.common import CamelModel, RequiredStr


# ---------- Credentials ----------
class Credentials(CamelModel):
    lock_pin: Optional[str] = None
    passwords: Optional[Dict[str, str]] = None


# ---------- Machine ----------
class MachineBase(CamelModel):
    display_name: Optional[str] = None
    gambino_machine_id: Optional[str] = None
    serial_number: Optional[str] = None
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    purchase_date: Optional[date] = None
    purchase_price: Optional[float] = Field(None, ge=0)
    rom_version: Optional[str] = None
    software_version: Optional[str] = None
    dip_switch_config: Optional[Dict[str, Any]] = None
    current_location: Optional[str] = None
    hub_id: Optional[str] = None
    game_type: Optional[str] = None
    game_title: Optional[str] = None
    notes: Optional[str] = None


class MachineCreate(MachineBase):
    machine_id: RequiredStr
    status: MachineStatus = MachineStatus.storage
    store_id: Optional[str] = None  # internal venue id or external store code
    credentials: Optional[Credentials] = None


class MachineUpdate(MachineBase):
    machine_id: Optional[RequiredStr] = None
    status: Optional[MachineStatus] = None
    store_id: Optional[str] = None
    credentials: Optional[Credentials] = None


class MachineRead(MachineBase):
    id: str = Field(alias="_id")
    machine_id: str
    status: MachineStatus
    current_location: str
    store_id: Optional[str] = None
    venue_name: Optional[str] = None
    credentials: Optional[Credentials] = None
    asset_tag_token: Optional[str] = Field(None, serialization_alias="assetTag")
    qr_token: Optional[str] = None
    qr_url: Optional[str] = None
    qr_generated_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class MachineSummary(CamelModel):
    id: str = Field(alias="_id")
    machine_id: str
    display_name: Optional[str] = None
    status: MachineStatus
    venue_name: Optional[str] = None


# ---------- Public (QR scan) view ----------
class MachinePublicView(CamelModel):
    machine_id: str
    display_name: Optional[str] = None
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    serial_number: Optional[str] = None
    status: MachineStatus
    venue: Optional[str] = None
    location: Optional[str] = None
    hub_id: Optional[str] = None
    game_title: Optional[str] = None
    credentials: Optional[Credentials] = None

    @classmethod
    def from_machine(cls, machine, include_credentials: bool = False) -> "MachinePublicView":
        return cls(
            machine_id=machine.machine_id,
            display_name=machine.display_name,
            manufacturer=machine.manufacturer,
            model=machine.model,
            serial_number=machine.serial_number,
            status=machine.status,
            venue=machine.venue_name,
            location=machine.current_location,
            hub_id=machine.hub_id,
            game_title=machine.game_title,
            credentials=machine.credentials if include_credentials else None,
        )


class QrTokenRead(CamelModel):
    token: str
    generated_at: datetime
    url: str


# ---------- Hubs ----------
class HubGroup(CamelModel):
    hub_id: Optional[str] = None
    machines: List[MachineRead] = []


# ---------- Bulk edits ----------
class BulkChanges(CamelModel):
    status: Optional[MachineStatus] = None
    store_id: Optional[str] = None
    hub_id: Optional[str] = None
    current_location: Optional[str] = None


class BulkUpdateRequest(CamelModel):
    ids: List[str]
    changes: BulkChanges


class BulkFailure(CamelModel):
    id: str
    error: str


class BulkUpdateResult(CamelModel):
    updated: List[str] = []
    failed: List[BulkFailure] = []
