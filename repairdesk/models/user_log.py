"""Append-only audit trail of user actions."""

from __future__ import annotations

from sqlalchemy import String, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column

from repairdesk.models.base import Base, ULIDMixin


class UserLog(Base, ULIDMixin):
    __tablename__ = "user_logs"

    user_id: Mapped[str] = mapped_column(String(26), index=True)
    action: Mapped[str] = mapped_column(String(50))
    description: Mapped[str] = mapped_column(Text, default="")
    ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String(500), nullable=True)
    # "metadata" is reserved on declarative classes
    meta: Mapped[dict | None] = mapped_column("metadata", JSON, nullable=True)
