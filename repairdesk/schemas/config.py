from __future__ import annotations

from datetime import datetime

from repairdesk.schemas.common import CamelModel, OptionalStr, RequiredStr


class ConfigTypeCreate(CamelModel):
    name: RequiredStr


class ConfigTypeRead(CamelModel):
    id: str
    name: str
    created_at: datetime


class ConfigBrief(CamelModel):
    id: str
    name: str
    type: str


class TechnicianBrief(CamelModel):
    id: str
    name: str
    number: str
    spare_number: str | None = None
    url: str | None = None


class ConfigCreate(CamelModel):
    name: RequiredStr
    type: RequiredStr


class ConfigUpdate(CamelModel):
    name: OptionalStr = None
    type: OptionalStr = None


class ConfigRead(ConfigBrief):
    created_at: datetime
    updated_at: datetime
    technicians: list[TechnicianBrief] = []
