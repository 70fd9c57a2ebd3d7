"""Guards run before a workorder write. Nothing here touches the database
except to read referenced rows."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from repairdesk.db import crud
from repairdesk.errors import NotFoundError, ValidationError
from repairdesk.schemas.workorder import WorkorderItemIn


async def validate_workorder_items(db: AsyncSession, items: list[WorkorderItemIn]) -> None:
    """Reject the whole batch if any item is incomplete or points at bad references."""
    if not items:
        raise ValidationError("At least one workorder item is required")

    incomplete = [
        {"index": index, "missing": missing}
        for index, item in enumerate(items)
        if (missing := item.missing_fields())
    ]
    if incomplete:
        raise ValidationError("Workorder items are missing required fields", missingFields=incomplete)

    reversed_dates = [index for index, item in enumerate(items) if item.start_date > item.end_date]
    if reversed_dates:
        raise ValidationError("startDate must not be after endDate", invalidItems=reversed_dates)

    user_ids = {uid for item in items for uid in (item.owner_id, item.approver_id) if uid}
    invalid_user_ids = sorted(user_ids - await crud.active_user_ids(db, user_ids))
    if invalid_user_ids:
        raise ValidationError("Invalid or inactive user IDs", invalidUserIds=invalid_user_ids)

    for item in items:
        if not await crud.get_config(db, item.config_id):
            raise NotFoundError(f"Config {item.config_id} not found", configId=item.config_id)


def validate_sort(sort_by: str, sort_order: str, keys) -> str:
    """Check list sort parameters against ``keys``; returns the normalised order."""
    if sort_by not in keys:
        raise ValidationError(f"sortBy must be one of {', '.join(keys)}", sortBy=sort_by)
    sort_order = sort_order.lower()
    if sort_order not in ("asc", "desc"):
        raise ValidationError("sortOrder must be 'asc' or 'desc'", sortOrder=sort_order)
    return sort_order
