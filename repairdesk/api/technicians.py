"""Technician directory API."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from repairdesk.db import crud
from repairdesk.dependencies import get_db, get_current_user_id
from repairdesk.errors import NotFoundError
from repairdesk.schemas import (
    DataResponse, PageResponse, Pagination, MessageResponse,
    TechnicianCreate, TechnicianUpdate, TechnicianRead,
)
from repairdesk.services.user_log import record_user_log
from repairdesk.services.validation import validate_sort

router = APIRouter(prefix="/technician", tags=["technicians"])


async def _require_config(db: AsyncSession, config_id: str) -> None:
    if not await crud.get_config(db, config_id):
        raise NotFoundError("Config not found", configId=config_id)


@router.get("", response_model=PageResponse[TechnicianRead])
async def list_technicians(
    page: int = Query(1, ge=1),
    size: int = Query(10, ge=1, le=100),
    name: str | None = None,
    number: str | None = None,
    config_id: str | None = Query(None, alias="configId"),
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder"),
    db: AsyncSession = Depends(get_db),
):
    sort_order = validate_sort(sort_by, sort_order, crud.TECHNICIAN_SORT_KEYS)
    rows, total = await crud.list_technicians(
        db, page=page, size=size, name=name, number=number, config_id=config_id,
        sort_by=sort_by, sort_order=sort_order,
    )
    return {"data": rows, "pagination": Pagination.build(page, size, total)}


@router.get("/{tech_id}", response_model=DataResponse[TechnicianRead])
async def get_technician(tech_id: str, db: AsyncSession = Depends(get_db)):
    tech = await crud.get_technician(db, tech_id)
    if not tech:
        raise NotFoundError("Technician not found", id=tech_id)
    return {"data": tech}


@router.post("", response_model=DataResponse[TechnicianRead], status_code=201)
async def create_technician(
    body: TechnicianCreate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    user_id: str | None = Depends(get_current_user_id),
):
    await _require_config(db, body.config_id)
    tech = await crud.create_technician(
        db, name=body.name.strip(), number=body.number.strip(), config_id=body.config_id,
        spare_number=body.spare_number, url=body.url,
    )
    data = TechnicianRead.model_validate(tech)
    await record_user_log(db, user_id, "TECHNICIAN_CREATE", f"Created technician {tech.id}", request)
    return {"message": "Technician created", "data": data}


@router.put("/{tech_id}", response_model=DataResponse[TechnicianRead])
async def update_technician(
    tech_id: str,
    body: TechnicianUpdate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    user_id: str | None = Depends(get_current_user_id),
):
    tech = await crud.get_technician(db, tech_id)
    if not tech:
        raise NotFoundError("Technician not found", id=tech_id)
    if body.config_id:
        await _require_config(db, body.config_id)

    # name/number/configId ignore blanks; spareNumber/url may be cleared explicitly
    updates = {}
    for field in ("name", "number", "config_id"):
        value = getattr(body, field)
        if value:
            updates[field] = value
    for field in ("spare_number", "url"):
        if field in body.model_fields_set:
            updates[field] = getattr(body, field)

    if updates:
        tech = await crud.update_technician(db, tech, **updates)
    data = TechnicianRead.model_validate(tech)
    await record_user_log(db, user_id, "TECHNICIAN_UPDATE", f"Updated technician {tech_id}", request)
    return {"message": "Technician updated", "data": data}


@router.delete("/{tech_id}", response_model=MessageResponse)
async def delete_technician(
    tech_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    user_id: str | None = Depends(get_current_user_id),
):
    tech = await crud.get_technician(db, tech_id)
    if not tech:
        raise NotFoundError("Technician not found", id=tech_id)
    await crud.delete_technician(db, tech)
    await record_user_log(db, user_id, "TECHNICIAN_DELETE", f"Deleted technician {tech_id}", request)
    return {"message": "Technician deleted"}
