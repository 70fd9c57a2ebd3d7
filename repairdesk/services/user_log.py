"""Audit sink for user actions. Failures here never break the caller."""

from __future__ import annotations

import logging

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from repairdesk.db import crud

logger = logging.getLogger(__name__)


def _client_ip(request: Request) -> str | None:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


async def record_user_log(
    db: AsyncSession,
    user_id: str | None,
    action: str,
    description: str,
    request: Request | None = None,
    metadata: dict | None = None,
) -> None:
    if not user_id:
        return

    ip_address = user_agent = None
    if request is not None:
        ip_address = _client_ip(request)
        user_agent = request.headers.get("user-agent")

    try:
        await crud.create_user_log(
            db, user_id, action, description,
            ip_address=ip_address, user_agent=user_agent, meta=metadata,
        )
        logger.debug("User log %s recorded for user %s", action, user_id)
    except SQLAlchemyError:
        logger.exception("Failed to record user log %s for user %s", action, user_id)
        await db.rollback()
