from pydantic import EmailStr, Field, field_validator
from typing import List, Optional
from datetime import datetime

from vdv_inventory.schemas.common import CamelModel, RequiredStr
from vdv_inventory.schemas.machine import MachineRead


class StoreBase(CamelModel):
    address: Optional[str] = None
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    access_notes: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("contact_email", mode="before")
    @classmethod
    def blank_email_is_none(cls, v):
        # Dashboard forms submit "" for an untouched email input
        if isinstance(v, str) and not v.strip():
            return None
        return v


class StoreCreate(StoreBase):
    store_id: RequiredStr
    name: RequiredStr


class StoreUpdate(StoreBase):
    store_id: Optional[RequiredStr] = None
    name: Optional[RequiredStr] = None


class StoreRead(StoreBase):
    id: str = Field(alias="_id")
    store_id: str
    name: str
    created_at: datetime
    updated_at: datetime


class StoreDetail(StoreRead):
    machines: List[MachineRead] = []
