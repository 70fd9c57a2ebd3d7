from __future__ import annotations

from datetime import datetime

from repairdesk.schemas.common import CamelModel, OptionalStr, RequiredStr
from repairdesk.schemas.config import ConfigBrief


class TechnicianCreate(CamelModel):
    name: RequiredStr
    number: RequiredStr
    config_id: RequiredStr
    spare_number: str | None = None
    url: str | None = None


class TechnicianUpdate(CamelModel):
    name: OptionalStr = None
    number: OptionalStr = None
    spare_number: str | None = None
    url: str | None = None
    config_id: OptionalStr = None


class TechnicianRead(CamelModel):
    id: str
    name: str
    number: str
    spare_number: str | None = None
    url: str | None = None
    config_id: str
    config: ConfigBrief | None = None
    created_at: datetime
