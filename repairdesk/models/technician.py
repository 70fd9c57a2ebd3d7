"""Technician model: contact sheet grouped by repair category."""

from __future__ import annotations

from sqlalchemy import String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from repairdesk.models.base import Base, ULIDMixin


class Technician(Base, ULIDMixin):
    __tablename__ = "technicians"

    name: Mapped[str] = mapped_column(String(200))
    number: Mapped[str] = mapped_column(String(50))
    spare_number: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    url: Mapped[str | None] = mapped_column(String(500), nullable=True, default=None)
    config_id: Mapped[str] = mapped_column(String(26), ForeignKey("configs.id"))

    config = relationship("Config", back_populates="technicians", lazy="selectin")
