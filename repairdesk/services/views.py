"""Plain read-only views of a workorder for message templates and dispatch.

Background work runs after the request session is closed, so it gets these
snapshots instead of ORM rows.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from repairdesk.models import User, Workorder, WorkorderItem


@dataclass(frozen=True)
class PersonView:
    id: str
    name: str


@dataclass(frozen=True)
class ItemView:
    id: str
    category: str
    detail: str
    start_date: datetime | None = None
    end_date: datetime | None = None
    comment: str | None = None
    owner: PersonView | None = None
    approver: PersonView | None = None
    status_approve_id: int = 1
    attachment_count: int = 0


@dataclass(frozen=True)
class WorkorderView:
    id: str
    title: str
    status: str
    created_at: datetime
    items: list[ItemView] = field(default_factory=list)


def _person(user: User | None) -> PersonView | None:
    if user is None:
        return None
    return PersonView(id=user.id, name=user.full_name)


def item_view(item: WorkorderItem) -> ItemView:
    return ItemView(
        id=item.id,
        category=item.config.name if item.config else "",
        detail=item.detail,
        start_date=item.start_date,
        end_date=item.end_date,
        comment=item.comment,
        owner=_person(item.owner),
        approver=_person(item.approver),
        status_approve_id=item.status_approve_id,
        attachment_count=len(item.attachments),
    )


def workorder_view(wo: Workorder) -> WorkorderView:
    return WorkorderView(
        id=wo.id,
        title=wo.title,
        status=wo.status,
        created_at=wo.created_at,
        items=[item_view(item) for item in wo.items],
    )
