"""Read-only user listing for owner/approver pickers."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from repairdesk.db import crud
from repairdesk.dependencies import get_db
from repairdesk.schemas import DataResponse, UserRead

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=DataResponse[list[UserRead]])
async def list_users(db: AsyncSession = Depends(get_db)):
    return {"data": await crud.list_users(db)}
