"""FastAPI dependency providers for settings, DB sessions and outbound clients."""

from __future__ import annotations

from functools import lru_cache

from fastapi import Header, Request

from repairdesk.config import Settings, get_settings
from repairdesk.db.engine import get_db
from repairdesk.services.approval import ApprovalGateway
from repairdesk.services.chat import ChatNotifier

__all__ = [
    "get_db", "get_settings_dep", "get_chat_notifier",
    "get_approval_gateway", "get_current_user_id",
]


@lru_cache
def get_settings_dep() -> Settings:
    return get_settings()


def get_chat_notifier(request: Request) -> ChatNotifier:
    """The notifier built once in the app lifespan."""
    return request.app.state.chat_notifier


def get_approval_gateway(request: Request) -> ApprovalGateway:
    return request.app.state.approval_gateway


async def get_current_user_id(x_user_id: str | None = Header(default=None)) -> str | None:
    """Authenticated user id forwarded by the auth middleware in front of this API.

    Optional: the approval service's status callback arrives without one.
    """
    return x_user_id or None
