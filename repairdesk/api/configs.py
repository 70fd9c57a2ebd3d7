"""Repair category (config) and config type management."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from repairdesk.db import crud
from repairdesk.dependencies import get_db, get_current_user_id
from repairdesk.errors import ConflictError, NotFoundError
from repairdesk.schemas import (
    DataResponse, PageResponse, Pagination, MessageResponse,
    ConfigCreate, ConfigUpdate, ConfigRead, ConfigTypeCreate, ConfigTypeRead,
)
from repairdesk.services.user_log import record_user_log
from repairdesk.services.validation import validate_sort

router = APIRouter(prefix="/config", tags=["configs"])


async def _require_type(db: AsyncSession, name: str) -> None:
    if not await crud.get_config_type_by_name(db, name):
        raise NotFoundError(f"Config type '{name}' not found", type=name)


# ── Types ────────────────────────────────────────────────

@router.get("/type", response_model=DataResponse[list[ConfigTypeRead]])
async def list_config_types(db: AsyncSession = Depends(get_db)):
    return {"data": await crud.list_config_types(db)}


@router.post("/type", response_model=DataResponse[ConfigTypeRead], status_code=201)
async def create_config_type(body: ConfigTypeCreate, db: AsyncSession = Depends(get_db)):
    name = body.name.strip()
    if await crud.get_config_type_by_name(db, name):
        raise ConflictError(f"Config type '{name}' already exists", name=name)
    ct = await crud.create_config_type(db, name)
    return {"message": "Config type created", "data": ct}


# ── Configs ──────────────────────────────────────────────

@router.get("", response_model=PageResponse[ConfigRead])
async def list_configs(
    page: int = Query(1, ge=1),
    size: int = Query(10, ge=1, le=100),
    name: str | None = None,
    type: str | None = None,
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder"),
    db: AsyncSession = Depends(get_db),
):
    sort_order = validate_sort(sort_by, sort_order, crud.CONFIG_SORT_KEYS)
    rows, total = await crud.list_configs(
        db, page=page, size=size, name=name, type=type,
        sort_by=sort_by, sort_order=sort_order,
    )
    return {"data": rows, "pagination": Pagination.build(page, size, total)}


@router.get("/{config_id}", response_model=DataResponse[ConfigRead])
async def get_config(config_id: str, db: AsyncSession = Depends(get_db)):
    config = await crud.get_config(db, config_id)
    if not config:
        raise NotFoundError("Config not found", id=config_id)
    return {"data": config}


@router.post("", response_model=DataResponse[ConfigRead], status_code=201)
async def create_config(
    body: ConfigCreate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    user_id: str | None = Depends(get_current_user_id),
):
    await _require_type(db, body.type)
    config = await crud.create_config(db, body.name.strip(), body.type)
    data = ConfigRead.model_validate(config)
    await record_user_log(db, user_id, "CONFIG_CREATE", f"Created config {config.id}", request)
    return {"message": "Config created", "data": data}


@router.put("/{config_id}", response_model=DataResponse[ConfigRead])
async def update_config(
    config_id: str,
    body: ConfigUpdate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    user_id: str | None = Depends(get_current_user_id),
):
    config = await crud.get_config(db, config_id)
    if not config:
        raise NotFoundError("Config not found", id=config_id)
    if body.type:
        await _require_type(db, body.type)

    config = await crud.update_config(db, config, name=body.name, type=body.type)
    data = ConfigRead.model_validate(config)
    await record_user_log(db, user_id, "CONFIG_UPDATE", f"Updated config {config_id}", request)
    return {"message": "Config updated", "data": data}


@router.delete("/{config_id}", response_model=MessageResponse)
async def delete_config(
    config_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    user_id: str | None = Depends(get_current_user_id),
):
    config = await crud.get_config(db, config_id)
    if not config:
        raise NotFoundError("Config not found", id=config_id)

    techs, items = await crud.count_config_references(db, config_id)
    if techs:
        raise ConflictError(
            "Config cannot be deleted while technicians reference it", technicians=techs,
        )
    if items:
        raise ConflictError(
            "Config cannot be deleted while workorder items reference it", workorderItems=items,
        )

    await crud.delete_config(db, config)
    await record_user_log(db, user_id, "CONFIG_DELETE", f"Deleted config {config_id}", request)
    return {"message": "Config deleted"}
