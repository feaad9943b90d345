"""
Dashboard view models.

Everything here is built fresh per request from database reads: the
search/sort state lives in query parameters, never in the process.
"""
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from vdv_inventory.core.constants import (
    HUB_GAME_TYPE,
    RECENT_MAINTENANCE_DAYS,
    MachineStatus,
    TagStatus,
)
from vdv_inventory.core.errors import ValidationError
from vdv_inventory.models import AssetTag, Machine, MaintenanceLog, Store
from vdv_inventory.schemas.dashboard import DashboardStats, HubSection, VenueOverview, VenueSection
from vdv_inventory.schemas.machine import MachineRead


def natural_key(value: Optional[str]):
    """Sort "M2" before "M10"."""
    parts = re.split(r"(\d+)", (value or "").lower())
    return [int(p) if p.isdigit() else p for p in parts]


@dataclass
class MachineListView:
    search: str = ""
    status: Optional[MachineStatus] = None
    sort: str = "updatedAt"
    order: str = "desc"

    SORT_FIELDS = {
        "machineId": lambda m: natural_key(m.machine_id),
        "displayName": lambda m: natural_key(m.display_name) if m.display_name else None,
        "status": lambda m: m.status.value,
        "venue": lambda m: m.venue_name.lower() if m.venue_name else None,
        "location": lambda m: (m.current_location or "").lower() or None,
        "manufacturer": lambda m: m.manufacturer.lower() if m.manufacturer else None,
        "createdAt": lambda m: m.created_at,
        "updatedAt": lambda m: m.updated_at,
    }
    SEARCH_FIELDS = (
        "machine_id",
        "display_name",
        "serial_number",
        "manufacturer",
        "model",
        "venue_name",
        "current_location",
        "game_title",
        "hub_id",
    )

    def __post_init__(self):
        if self.sort not in self.SORT_FIELDS:
            raise ValidationError(f"Unknown sort field: {self.sort}")
        if self.order not in ("asc", "desc"):
            raise ValidationError("order must be 'asc' or 'desc'")

    def matches(self, machine) -> bool:
        if self.status and machine.status != self.status:
            return False
        needle = self.search.strip().lower()
        if not needle:
            return True
        return any(
            needle in str(getattr(machine, field) or "").lower()
            for field in self.SEARCH_FIELDS
        )

    def apply(self, machines):
        rows = [m for m in machines if self.matches(m)]
        key = self.SORT_FIELDS[self.sort]
        present = [m for m in rows if key(m) is not None]
        missing = [m for m in rows if key(m) is None]
        present.sort(key=key, reverse=self.order == "desc")
        # Blank values always sink to the bottom
        return present + missing


async def get_stats(db: AsyncSession, now: Optional[datetime] = None) -> DashboardStats:
    now = now or datetime.utcnow()
    stats = DashboardStats()

    rows = await db.execute(select(Machine.status, func.count()).group_by(Machine.status))
    for status, count in rows.all():
        setattr(stats, MachineStatus(status).value, count)
        stats.total_machines += count

    stats.total_stores = (await db.execute(select(func.count()).select_from(Store))).scalar_one()

    cutoff = now - timedelta(days=RECENT_MAINTENANCE_DAYS)
    stats.recent_maintenance = (
        await db.execute(select(func.count()).select_from(MaintenanceLog).where(MaintenanceLog.date > cutoff))
    ).scalar_one()

    tag_rows = await db.execute(select(AssetTag.status, func.count()).group_by(AssetTag.status))
    for status, count in tag_rows.all():
        setattr(stats, f"{TagStatus(status).value}_tags", count)

    return stats


def format_hub_name(hub_id: str, hub_device=None) -> str:
    """Friendly hub label: the device's display name, "Pi 2" for "pi-2-nimbus-1", else the raw id."""
    if hub_device is not None and hub_device.display_name:
        return hub_device.display_name
    match = re.match(r"^pi-?(\d+)", hub_id, re.IGNORECASE)
    if match:
        return f"Pi {match.group(1)}"
    return hub_id


def _count_statuses(section: VenueSection, machines):
    for m in machines:
        section.total_machines += 1
        if m.status == MachineStatus.deployed:
            section.deployed_count += 1
        elif m.status == MachineStatus.storage:
            section.storage_count += 1
        elif m.status == MachineStatus.repair:
            section.repair_count += 1


async def get_venue_overview(db: AsyncSession) -> VenueOverview:
    """Venues -> hubs -> machines, busiest venue first."""
    machines = (await db.execute(select(Machine))).scalars().all()
    stores = (await db.execute(select(Store).order_by(Store.name))).scalars().all()

    hub_devices = {m.hub_id or m.machine_id: m for m in machines if m.game_type == HUB_GAME_TYPE}
    slot_machines = [m for m in machines if m.game_type != HUB_GAME_TYPE]

    by_store = {}
    unassigned = []
    for machine in slot_machines:
        if not machine.store_id:
            unassigned.append(machine)
            continue
        by_store.setdefault(machine.store_id, {}).setdefault(machine.hub_id, []).append(machine)

    overview = VenueOverview()
    for store in stores:
        section = VenueSection(store_id=store.id, name=store.name)
        for hub_id, hub_machines in by_store.get(store.id, {}).items():
            hub_machines.sort(key=lambda m: natural_key(m.machine_id))
            reads = [MachineRead.model_validate(m) for m in hub_machines]
            if hub_id is None:
                section.unassigned_machines = reads
            else:
                section.hubs.append(
                    HubSection(
                        hub_id=hub_id,
                        name=format_hub_name(hub_id, hub_devices.get(hub_id)),
                        machines=reads,
                    )
                )
            _count_statuses(section, hub_machines)

        section.hubs.sort(key=lambda h: natural_key(h.name))
        if section.total_machines or section.hubs:
            overview.venues.append(section)

    overview.venues.sort(key=lambda v: v.total_machines, reverse=True)

    if unassigned:
        section = VenueSection(
            name="Unassigned Machines",
            unassigned_machines=[MachineRead.model_validate(m) for m in unassigned],
        )
        _count_statuses(section, unassigned)
        overview.unassigned = section

    overview.total_machines = sum(v.total_machines for v in overview.venues) + (
        overview.unassigned.total_machines if overview.unassigned else 0
    )
    return overview
