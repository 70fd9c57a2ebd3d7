"""SQLAlchemy ORM models."""

from repairdesk.models.base import Base
from repairdesk.models.user import User
from repairdesk.models.config import Config, ConfigType
from repairdesk.models.technician import Technician
from repairdesk.models.status_approve import StatusApprove, PENDING_ID, APPROVED_ID, REJECTED_ID
from repairdesk.models.workorder import Workorder, WorkorderItem, Attachment
from repairdesk.models.user_log import UserLog

__all__ = [
    "Base", "User", "Config", "ConfigType", "Technician",
    "StatusApprove", "PENDING_ID", "APPROVED_ID", "REJECTED_ID",
    "Workorder", "WorkorderItem", "Attachment", "UserLog",
]
