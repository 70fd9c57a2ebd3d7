"""Workorder lifecycle: create / update / delete, status callback, and the
post-commit side effects (approval hand-off and chat notification)."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from repairdesk.config import Settings
from repairdesk.db import crud
from repairdesk.errors import DependencyError, NotFoundError, ValidationError
from repairdesk.models import APPROVED_ID, Workorder, WorkorderItem
from repairdesk.schemas.workorder import WorkorderCreate, WorkorderUpdate, parse_date_param
from repairdesk.services.approval import ApprovalGateway, dispatch_approvals
from repairdesk.services.chat import ChatNotifier
from repairdesk.services.notification import compose_repair_reminder, compose_workorder_message
from repairdesk.services.validation import validate_sort, validate_workorder_items
from repairdesk.services.views import WorkorderView, item_view

logger = logging.getLogger(__name__)

DEFAULT_STATUS = "PENDING"


async def create_workorder(db: AsyncSession, body: WorkorderCreate) -> Workorder:
    await validate_workorder_items(db, body.workorder_items)
    wo = await crud.create_workorder(
        db, body.title, body.status or DEFAULT_STATUS, body.workorder_items,
    )
    logger.info("Created workorder %s with %d items", wo.id, len(wo.items))
    return wo


async def get_workorder(db: AsyncSession, wo_id: str) -> Workorder:
    wo = await crud.get_workorder(db, wo_id)
    if not wo:
        raise NotFoundError("Workorder not found", id=wo_id)
    return wo


async def update_workorder(db: AsyncSession, wo_id: str, body: WorkorderUpdate) -> Workorder:
    """Apply only the fields present in ``body``.

    A supplied item list replaces every existing item; old item ids stop
    resolving after the update.
    """
    wo = await get_workorder(db, wo_id)

    fields = {}
    for name in ("title", "status"):
        if name in body.model_fields_set and getattr(body, name) is not None:
            value = getattr(body, name).strip()
            if not value:
                raise ValidationError(f"{name} must not be blank")
            fields[name] = value

    items = None
    if "workorder_items" in body.model_fields_set and body.workorder_items is not None:
        await validate_workorder_items(db, body.workorder_items)
        items = body.workorder_items

    wo = await crud.update_workorder(db, wo, fields, items)
    logger.info(
        "Updated workorder %s (fields=%s, items replaced=%s)",
        wo.id, sorted(fields), items is not None,
    )
    return wo


async def delete_workorder(db: AsyncSession, wo_id: str) -> None:
    wo = await get_workorder(db, wo_id)
    await crud.delete_workorder(db, wo)
    logger.info("Deleted workorder %s", wo_id)


async def list_workorders(
    db: AsyncSession,
    page: int = 1,
    size: int = 10,
    title: str | None = None,
    status: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
    sort_by: str = "createdAt",
    sort_order: str = "desc",
) -> tuple[list[Workorder], int]:
    sort_order = validate_sort(sort_by, sort_order, crud.WORKORDER_SORT_KEYS)

    try:
        start = parse_date_param(start_date) if start_date else None
        end = parse_date_param(end_date) if end_date else None
    except ValueError:
        raise ValidationError("startDate and endDate must be ISO-8601 dates")
    if start and end and start > end:
        raise ValidationError("startDate must not be after endDate")

    return await crud.list_workorders(
        db, page=page, size=size, title=title, status=status,
        start_date=start, end_date=end, sort_by=sort_by, sort_order=sort_order,
    )


async def update_item_status(
    db: AsyncSession, item_id: str, status_approve_id: int, comment: str | None = None,
) -> WorkorderItem:
    """Callback target of the approval service. Safe to call repeatedly."""
    item = await crud.get_workorder_item(db, item_id)
    if not item:
        raise NotFoundError("Workorder item not found", id=item_id)
    if not await crud.get_status_approve(db, status_approve_id):
        raise NotFoundError("Approval status not found", statusApproveId=status_approve_id)

    item = await crud.update_workorder_item_status(db, item, status_approve_id, comment)
    logger.info("Workorder item %s set to status %s", item_id, status_approve_id)
    return item


async def announce_workorder(
    view: WorkorderView,
    gateway: ApprovalGateway,
    notifier: ChatNotifier,
    settings: Settings,
) -> None:
    """Post-commit side effects of a new workorder.

    The workorder is already stored; outbound failures are logged only.
    """
    try:
        await dispatch_approvals(gateway, view, settings.public_base_url)
    except DependencyError as e:
        logger.warning("Approval dispatch incomplete for workorder %s: %s", view.id, e.message)

    try:
        await notifier.push(compose_workorder_message(view, settings.notification))
    except DependencyError as e:
        logger.warning("Chat notification for workorder %s not delivered: %s", view.id, e.message)


async def repair_notify(db: AsyncSession, notifier: ChatNotifier, settings: Settings) -> tuple[bool, int, str]:
    """Broadcast every approved item as a reminder. Returns (sent, item count, text)."""
    items = [item_view(item) for item in await crud.list_items_by_status(db, APPROVED_ID)]
    message = compose_repair_reminder(items, settings.notification)
    if not items:
        logger.info("No approved items; repair reminder skipped")
        return False, 0, message

    try:
        await notifier.push(message)
    except DependencyError as e:
        logger.warning("Repair reminder not delivered: %s", e.message)
        return False, len(items), message
    return True, len(items), message
