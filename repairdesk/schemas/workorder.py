"""Workorder request/response schemas.

Item fields on the way in are all optional on purpose: the validation
service reports every missing field across the batch in one error instead
of failing on the first one.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import AliasChoices, Field, field_validator

from repairdesk.schemas.common import CamelModel, RequiredStr
from repairdesk.schemas.config import ConfigBrief
from repairdesk.schemas.user import UserSummary

REQUIRED_ITEM_FIELDS = ("detail", "owner_id", "approver_id", "start_date", "end_date", "config_id")


def naive_utc(value: datetime) -> datetime:
    """Stored datetimes are naive UTC; convert aware values on the way in."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_date_param(value: str) -> datetime:
    """Parse `YYYY-MM-DD` or a full ISO-8601 timestamp from a query string."""
    return naive_utc(datetime.fromisoformat(value))


class WorkorderItemIn(CamelModel):
    config_id: str | None = None
    detail: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    owner_id: str | None = None
    approver_id: str | None = None
    comment: str | None = None
    attachments: list[str] = []

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def date_only_means_midnight(cls, value):
        if isinstance(value, str) and len(value) == 10:
            return f"{value}T00:00:00"
        return value

    @field_validator("start_date", "end_date")
    @classmethod
    def store_as_naive_utc(cls, value):
        return naive_utc(value) if value is not None else value

    def missing_fields(self) -> list[str]:
        """camelCase names of required fields that are absent or blank."""
        missing = []
        for name in REQUIRED_ITEM_FIELDS:
            value = getattr(self, name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(type(self).model_fields[name].alias or name)
        return missing


class WorkorderCreate(CamelModel):
    title: RequiredStr
    status: str | None = None
    workorder_items: list[WorkorderItemIn] = []


class WorkorderUpdate(CamelModel):
    """Partial update: only fields present in the request body are applied."""

    title: str | None = None
    status: str | None = None
    workorder_items: list[WorkorderItemIn] | None = None


class ItemStatusUpdate(CamelModel):
    status_approve_id: int
    comment: str | None = None


class StatusApproveCreate(CamelModel):
    id: int | None = None
    name: RequiredStr


class StatusApproveRead(CamelModel):
    id: int
    name: str


class AttachmentRead(CamelModel):
    id: str
    url: str


class WorkorderItemRead(CamelModel):
    id: str
    workorder_id: str
    config_id: str
    config: ConfigBrief | None = None
    detail: str
    start_date: datetime | None = None
    end_date: datetime | None = None
    owner_id: str | None = None
    owner: UserSummary | None = None
    approver_id: str | None = None
    approver: UserSummary | None = None
    status_approve_id: int
    status_approve: StatusApproveRead | None = None
    comment: str | None = None
    attachments: list[AttachmentRead] = []


class WorkorderRead(CamelModel):
    id: str
    title: str
    status: str
    created_at: datetime
    updated_at: datetime
    workorder_items: list[WorkorderItemRead] = Field(
        default=[],
        validation_alias=AliasChoices("workorderItems", "workorder_items", "items"),
        serialization_alias="workorderItems",
    )


class RepairNotifyResult(CamelModel):
    sent: bool
    item_count: int
    message: str
