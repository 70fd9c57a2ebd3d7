"""Workorder aggregate: workorder -> ordered items -> attachments."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import String, Integer, Text, ForeignKey, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from repairdesk.models.base import Base, ULIDMixin
from repairdesk.models.status_approve import PENDING_ID


class Workorder(Base, ULIDMixin):
    __tablename__ = "workorders"

    title: Mapped[str] = mapped_column(String(255))
    status: Mapped[str] = mapped_column(String(20), default="PENDING")

    items = relationship(
        "WorkorderItem",
        back_populates="workorder",
        order_by="WorkorderItem.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class WorkorderItem(Base, ULIDMixin):
    __tablename__ = "workorder_items"

    workorder_id: Mapped[str] = mapped_column(
        String(26), ForeignKey("workorders.id", ondelete="CASCADE"), index=True
    )
    position: Mapped[int] = mapped_column(Integer, default=0)
    config_id: Mapped[str] = mapped_column(String(26), ForeignKey("configs.id"))
    detail: Mapped[str] = mapped_column(Text, default="")
    start_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    end_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    owner_id: Mapped[str | None] = mapped_column(String(26), ForeignKey("users.id"), nullable=True)
    approver_id: Mapped[str | None] = mapped_column(String(26), ForeignKey("users.id"), nullable=True)
    status_approve_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("status_approves.id"), default=PENDING_ID
    )
    comment: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    workorder = relationship("Workorder", back_populates="items")
    config = relationship("Config", lazy="selectin")
    owner = relationship("User", foreign_keys=[owner_id], lazy="selectin")
    approver = relationship("User", foreign_keys=[approver_id], lazy="selectin")
    status_approve = relationship("StatusApprove", lazy="selectin")
    attachments = relationship(
        "Attachment",
        back_populates="item",
        order_by="Attachment.seq",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class Attachment(Base, ULIDMixin):
    __tablename__ = "attachments"

    workorder_item_id: Mapped[str] = mapped_column(
        String(26), ForeignKey("workorder_items.id", ondelete="CASCADE"), index=True
    )
    seq: Mapped[int] = mapped_column(Integer, default=0)
    url: Mapped[str] = mapped_column(String(1000))

    item = relationship("WorkorderItem", back_populates="attachments")
