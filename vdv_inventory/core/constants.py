import enum


class MachineStatus(str, enum.Enum):
    deployed = "deployed"
    storage = "storage"
    repair = "repair"
    decommissioned = "decommissioned"


class MaintenanceType(str, enum.Enum):
    preventive = "preventive"
    repair = "repair"
    install = "install"
    move = "move"
    other = "other"


class TagStatus(str, enum.Enum):
    unlinked = "unlinked"
    linked = "linked"


# Location assigned to machines that have no venue
DEFAULT_LOCATION = "warehouse"

TAG_BATCH_MIN = 1
TAG_BATCH_MAX = 100

# Machines with this game type are hub/gateway devices, not slot machines
HUB_GAME_TYPE = "edge"

RECENT_MAINTENANCE_DAYS = 30
