"""Approval status lookup (1 = Pending, 2 = Approved, ...)."""

from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from repairdesk.models.base import Base

PENDING_ID = 1
APPROVED_ID = 2
REJECTED_ID = 3

DEFAULT_STATUSES = {
    PENDING_ID: "Pending",
    APPROVED_ID: "Approved",
    REJECTED_ID: "Rejected",
}


class StatusApprove(Base):
    __tablename__ = "status_approves"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50))
