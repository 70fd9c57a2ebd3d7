"""Repair categories (Config) and their allowed types."""

from __future__ import annotations

from sqlalchemy import String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from repairdesk.models.base import Base, ULIDMixin


class ConfigType(Base, ULIDMixin):
    __tablename__ = "config_types"

    name: Mapped[str] = mapped_column(String(100), unique=True)


class Config(Base, ULIDMixin):
    __tablename__ = "configs"

    name: Mapped[str] = mapped_column(String(200))
    type: Mapped[str] = mapped_column(String(100), ForeignKey("config_types.name"))

    technicians = relationship(
        "Technician", back_populates="config", lazy="selectin",
        order_by="Technician.created_at",
    )
