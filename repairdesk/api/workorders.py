"""Workorder API: create, list, update, delete, approval status callback."""

from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from repairdesk.config import Settings
from repairdesk.db import crud
from repairdesk.dependencies import (
    get_db, get_settings_dep, get_chat_notifier, get_approval_gateway, get_current_user_id,
)
from repairdesk.errors import ConflictError
from repairdesk.schemas import (
    DataResponse, PageResponse, Pagination, MessageResponse,
    WorkorderCreate, WorkorderUpdate, WorkorderRead, WorkorderItemRead,
    ItemStatusUpdate, StatusApproveCreate, StatusApproveRead, RepairNotifyResult,
)
from repairdesk.services import workorders
from repairdesk.services.approval import ApprovalGateway
from repairdesk.services.chat import ChatNotifier
from repairdesk.services.user_log import record_user_log
from repairdesk.services.views import workorder_view

router = APIRouter(prefix="/workorder", tags=["workorders"])


# ── Status lookup ────────────────────────────────────────

@router.get("/statusApprove", response_model=DataResponse[list[StatusApproveRead]])
async def list_status_approves(db: AsyncSession = Depends(get_db)):
    return {"data": await crud.list_status_approves(db)}


@router.post("/statusApprove", response_model=DataResponse[StatusApproveRead], status_code=201)
async def create_status_approve(body: StatusApproveCreate, db: AsyncSession = Depends(get_db)):
    if body.id is not None and await crud.get_status_approve(db, body.id):
        raise ConflictError(f"Approval status {body.id} already exists", id=body.id)
    status = await crud.create_status_approve(db, body.name, body.id)
    return {"message": "Approval status created", "data": status}


# ── Reminders ────────────────────────────────────────────

@router.post("/notify/repair", response_model=DataResponse[RepairNotifyResult])
async def notify_approved_repairs(
    db: AsyncSession = Depends(get_db),
    notifier: ChatNotifier = Depends(get_chat_notifier),
    settings: Settings = Depends(get_settings_dep),
):
    """Push a reminder listing every approved item. Meant for on-demand or cron use."""
    sent, count, message = await workorders.repair_notify(db, notifier, settings)
    return {"data": RepairNotifyResult(sent=sent, item_count=count, message=message)}


# ── Approval callback ────────────────────────────────────

@router.put("/item/{item_id}/status", response_model=DataResponse[WorkorderItemRead])
async def update_item_status(
    item_id: str,
    body: ItemStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    item = await workorders.update_item_status(db, item_id, body.status_approve_id, body.comment)
    return {"message": "Item status updated", "data": WorkorderItemRead.model_validate(item)}


# ── Workorders ───────────────────────────────────────────

@router.post("", response_model=DataResponse[WorkorderRead], status_code=201)
async def create_workorder(
    body: WorkorderCreate,
    request: Request,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
    notifier: ChatNotifier = Depends(get_chat_notifier),
    gateway: ApprovalGateway = Depends(get_approval_gateway),
    user_id: str | None = Depends(get_current_user_id),
):
    wo = await workorders.create_workorder(db, body)
    data = WorkorderRead.model_validate(wo)

    # Runs after the response is sent; failures are logged, never returned.
    background_tasks.add_task(
        workorders.announce_workorder, workorder_view(wo), gateway, notifier, settings,
    )

    await record_user_log(
        db, user_id, "WORKORDER_CREATE", f"Created workorder {wo.id}", request,
        {"workorderId": wo.id, "items": len(data.workorder_items)},
    )
    return {"message": "Workorder created successfully", "data": data}


@router.get("", response_model=PageResponse[WorkorderRead])
async def list_workorders(
    page: int = Query(1, ge=1),
    size: int = Query(10, ge=1, le=100),
    title: str | None = None,
    status: str | None = None,
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder"),
    db: AsyncSession = Depends(get_db),
):
    rows, total = await workorders.list_workorders(
        db, page=page, size=size, title=title, status=status,
        start_date=start_date, end_date=end_date, sort_by=sort_by, sort_order=sort_order,
    )
    return {
        "data": [WorkorderRead.model_validate(wo) for wo in rows],
        "pagination": Pagination.build(page, size, total),
    }


@router.get("/{wo_id}", response_model=DataResponse[WorkorderRead])
async def get_workorder(wo_id: str, db: AsyncSession = Depends(get_db)):
    wo = await workorders.get_workorder(db, wo_id)
    return {"data": WorkorderRead.model_validate(wo)}


@router.put("/{wo_id}", response_model=DataResponse[WorkorderRead])
async def update_workorder(
    wo_id: str,
    body: WorkorderUpdate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    user_id: str | None = Depends(get_current_user_id),
):
    wo = await workorders.update_workorder(db, wo_id, body)
    data = WorkorderRead.model_validate(wo)
    await record_user_log(
        db, user_id, "WORKORDER_UPDATE", f"Updated workorder {wo_id}", request,
        {"workorderId": wo_id, "fields": sorted(body.model_fields_set)},
    )
    return {"message": "Workorder updated", "data": data}


@router.delete("/{wo_id}", response_model=MessageResponse)
async def delete_workorder(
    wo_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    user_id: str | None = Depends(get_current_user_id),
):
    await workorders.delete_workorder(db, wo_id)
    await record_user_log(
        db, user_id, "WORKORDER_DELETE", f"Deleted workorder {wo_id}", request, {"workorderId": wo_id},
    )
    return {"message": "Workorder deleted"}
