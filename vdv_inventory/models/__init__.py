from .base import Base
from .store import Store
from .machine import Machine
from .maintenance_log import MaintenanceLog
from .asset_tag import AssetTag
