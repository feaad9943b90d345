from typing import List, Optional

from vdv_inventory.schemas.common import CamelModel
from vdv_inventory.schemas.machine import MachineRead


class DashboardStats(CamelModel):
    total_machines: int = 0
    deployed: int = 0
    storage: int = 0
    repair: int = 0
    decommissioned: int = 0
    total_stores: int = 0
    recent_maintenance: int = 0
    unlinked_tags: int = 0
    linked_tags: int = 0


class HubSection(CamelModel):
    hub_id: str
    name: str
    machines: List[MachineRead] = []


class VenueSection(CamelModel):
    store_id: Optional[str] = None  # None for the "unassigned" section
    name: str
    hubs: List[HubSection] = []
    unassigned_machines: List[MachineRead] = []
    total_machines: int = 0
    deployed_count: int = 0
    storage_count: int = 0
    repair_count: int = 0


class VenueOverview(CamelModel):
    venues: List[VenueSection] = []
    unassigned: Optional[VenueSection] = None
    total_machines: int = 0
