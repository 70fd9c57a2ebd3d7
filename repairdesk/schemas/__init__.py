"""Pydantic request/response schemas."""

from repairdesk.schemas.common import CamelModel, Pagination, DataResponse, PageResponse, MessageResponse
from repairdesk.schemas.user import UserSummary, UserRead
from repairdesk.schemas.config import (
    ConfigTypeCreate, ConfigTypeRead, ConfigBrief, ConfigCreate, ConfigUpdate, ConfigRead,
)
from repairdesk.schemas.technician import TechnicianCreate, TechnicianUpdate, TechnicianRead
from repairdesk.schemas.workorder import (
    WorkorderItemIn, WorkorderCreate, WorkorderUpdate, ItemStatusUpdate,
    StatusApproveCreate, StatusApproveRead, AttachmentRead,
    WorkorderItemRead, WorkorderRead, RepairNotifyResult,
)

__all__ = [
    "CamelModel", "Pagination", "DataResponse", "PageResponse", "MessageResponse",
    "UserSummary", "UserRead",
    "ConfigTypeCreate", "ConfigTypeRead", "ConfigBrief", "ConfigCreate", "ConfigUpdate", "ConfigRead",
    "TechnicianCreate", "TechnicianUpdate", "TechnicianRead",
    "WorkorderItemIn", "WorkorderCreate", "WorkorderUpdate", "ItemStatusUpdate",
    "StatusApproveCreate", "StatusApproveRead", "AttachmentRead",
    "WorkorderItemRead", "WorkorderRead", "RepairNotifyResult",
]
