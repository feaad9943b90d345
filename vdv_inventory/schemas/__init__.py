from .common import CamelModel, SuccessResponse

from .machine import (
    Credentials,
    MachineCreate,
    MachineUpdate,
    MachineRead,
    MachineSummary,
    MachinePublicView,
    QrTokenRead,
    HubGroup,
    BulkChanges,
    BulkUpdateRequest,
    BulkUpdateResult,
)

from .store import (
    StoreCreate,
    StoreUpdate,
    StoreRead,
    StoreDetail,
)

from .maintenance import (
    MaintenanceLogCreate,
    MaintenanceLogUpdate,
    MaintenanceLogRead,
)

from .asset_tag import (
    TagGenerateRequest,
    TagLinkRequest,
    AssetTagRead,
    TagView,
)

from .auth import LoginRequest, LoginResponse, AuthStatus

from .dashboard import DashboardStats, VenueOverview
