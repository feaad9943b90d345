from pydantic import Field, field_validator
from typing import List, Optional
from datetime import datetime

from vdv_inventory.core.constants import MaintenanceType
from vdv_inventory.schemas.common import CamelModel, RequiredStr, naive_utc
from vdv_inventory.schemas.machine import MachineSummary


class MaintenanceLogCreate(CamelModel):
    machine_id: RequiredStr
    date: Optional[datetime] = None  # defaults to now
    technician: RequiredStr
    type: MaintenanceType
    description: RequiredStr
    parts_replaced: List[str] = []
    cost: Optional[float] = Field(None, ge=0)

    @field_validator("date")
    @classmethod
    def date_as_naive_utc(cls, v):
        return naive_utc(v)


class MaintenanceLogUpdate(CamelModel):
    machine_id: Optional[RequiredStr] = None
    date: Optional[datetime] = None
    technician: Optional[RequiredStr] = None
    type: Optional[MaintenanceType] = None
    description: Optional[RequiredStr] = None
    parts_replaced: Optional[List[str]] = None
    cost: Optional[float] = Field(None, ge=0)

    @field_validator("date")
    @classmethod
    def date_as_naive_utc(cls, v):
        return naive_utc(v)


class MaintenanceLogRead(CamelModel):
    id: str = Field(alias="_id")
    machine_id: str
    date: datetime
    technician: str
    type: MaintenanceType
    description: str
    parts_replaced: List[str] = []
    cost: Optional[float] = None
    machine: Optional[MachineSummary] = None
    created_at: datetime
    updated_at: datetime
