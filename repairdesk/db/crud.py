"""CRUD operations for the repair desk models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Select, func, select, and_
from sqlalchemy.ext.asyncio import AsyncSession

from repairdesk.models import (
    User, Config, ConfigType, Technician, StatusApprove,
    Workorder, WorkorderItem, Attachment, UserLog, PENDING_ID,
)
from repairdesk.models.status_approve import DEFAULT_STATUSES
from repairdesk.schemas.workorder import WorkorderItemIn


async def _paginate(db: AsyncSession, stmt: Select, page: int, size: int) -> tuple[list, int]:
    """Run ``stmt`` for one page. Returns (rows, total matching rows)."""
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = (await db.execute(count_stmt)).scalar_one()
    result = await db.execute(stmt.offset((page - 1) * size).limit(size))
    return list(result.scalars().all()), total


def _order(column, sort_order: str):
    return column.asc() if sort_order == "asc" else column.desc()


# ── StatusApprove ────────────────────────────────────────

async def seed_status_approves(db: AsyncSession) -> None:
    """Insert the default approval statuses that are not present yet."""
    existing = set((await db.execute(select(StatusApprove.id))).scalars().all())
    for status_id, name in DEFAULT_STATUSES.items():
        if status_id not in existing:
            db.add(StatusApprove(id=status_id, name=name))
    await db.commit()


async def list_status_approves(db: AsyncSession) -> list[StatusApprove]:
    result = await db.execute(select(StatusApprove).order_by(StatusApprove.id))
    return list(result.scalars().all())


async def get_status_approve(db: AsyncSession, status_id: int) -> StatusApprove | None:
    return await db.get(StatusApprove, status_id)


async def create_status_approve(db: AsyncSession, name: str, status_id: int | None = None) -> StatusApprove:
    status = StatusApprove(id=status_id, name=name) if status_id is not None else StatusApprove(name=name)
    db.add(status)
    await db.commit()
    await db.refresh(status)
    return status


# ── User ─────────────────────────────────────────────────

async def get_user(db: AsyncSession, user_id: str) -> User | None:
    return await db.get(User, user_id)


async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.first_name, User.last_name))
    return list(result.scalars().all())


async def create_user(
    db: AsyncSession, email: str, first_name: str = "", last_name: str = "",
    active: bool = True, user_id: str | None = None,
) -> User:
    user = User(email=email, first_name=first_name, last_name=last_name, active=active)
    if user_id:
        user.id = user_id
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def active_user_ids(db: AsyncSession, user_ids: set[str]) -> set[str]:
    """Subset of ``user_ids`` that belong to active users."""
    if not user_ids:
        return set()
    result = await db.execute(
        select(User.id).where(User.id.in_(user_ids), User.active == True)
    )
    return set(result.scalars().all())


# ── ConfigType ───────────────────────────────────────────

async def list_config_types(db: AsyncSession) -> list[ConfigType]:
    result = await db.execute(select(ConfigType).order_by(ConfigType.name))
    return list(result.scalars().all())


async def get_config_type_by_name(db: AsyncSession, name: str) -> ConfigType | None:
    result = await db.execute(select(ConfigType).where(ConfigType.name == name))
    return result.scalars().first()


async def create_config_type(db: AsyncSession, name: str) -> ConfigType:
    ct = ConfigType(name=name)
    db.add(ct)
    await db.commit()
    await db.refresh(ct)
    return ct


# ── Config ───────────────────────────────────────────────

CONFIG_SORT_KEYS = {
    "createdAt": Config.created_at,
    "name": Config.name,
    "type": Config.type,
}


async def list_configs(
    db: AsyncSession, page: int = 1, size: int = 10,
    name: str | None = None, type: str | None = None,
    sort_by: str = "createdAt", sort_order: str = "desc",
) -> tuple[list[Config], int]:
    stmt = select(Config)
    if name:
        stmt = stmt.where(Config.name.ilike(f"%{name}%"))
    if type:
        stmt = stmt.where(Config.type == type)
    stmt = stmt.order_by(_order(CONFIG_SORT_KEYS[sort_by], sort_order), Config.id)
    return await _paginate(db, stmt, page, size)


async def get_config(db: AsyncSession, config_id: str) -> Config | None:
    return await db.get(Config, config_id)


async def create_config(db: AsyncSession, name: str, type: str) -> Config:
    config = Config(name=name, type=type)
    db.add(config)
    await db.commit()
    return await _fresh(db, Config, config.id)


async def update_config(db: AsyncSession, config: Config, **kwargs) -> Config:
    for k, v in kwargs.items():
        if v is not None:
            setattr(config, k, v)
    await db.commit()
    return await _fresh(db, Config, config.id)


async def count_config_references(db: AsyncSession, config_id: str) -> tuple[int, int]:
    """(technicians, workorder items) that point at a config."""
    techs = (await db.execute(
        select(func.count()).select_from(Technician).where(Technician.config_id == config_id)
    )).scalar_one()
    items = (await db.execute(
        select(func.count()).select_from(WorkorderItem).where(WorkorderItem.config_id == config_id)
    )).scalar_one()
    return techs, items


async def delete_config(db: AsyncSession, config: Config) -> None:
    await db.delete(config)
    await db.commit()


# ── Technician ───────────────────────────────────────────

TECHNICIAN_SORT_KEYS = {
    "createdAt": Technician.created_at,
    "name": Technician.name,
    "number": Technician.number,
}


async def list_technicians(
    db: AsyncSession, page: int = 1, size: int = 10,
    name: str | None = None, number: str | None = None, config_id: str | None = None,
    sort_by: str = "createdAt", sort_order: str = "desc",
) -> tuple[list[Technician], int]:
    stmt = select(Technician)
    if name:
        stmt = stmt.where(Technician.name.ilike(f"%{name}%"))
    if number:
        stmt = stmt.where(Technician.number.contains(number))
    if config_id:
        stmt = stmt.where(Technician.config_id == config_id)
    stmt = stmt.order_by(_order(TECHNICIAN_SORT_KEYS[sort_by], sort_order), Technician.id)
    return await _paginate(db, stmt, page, size)


async def get_technician(db: AsyncSession, tech_id: str) -> Technician | None:
    return await db.get(Technician, tech_id)


async def create_technician(
    db: AsyncSession, name: str, number: str, config_id: str,
    spare_number: str | None = None, url: str | None = None,
) -> Technician:
    tech = Technician(
        name=name, number=number, config_id=config_id,
        spare_number=spare_number, url=url,
    )
    db.add(tech)
    await db.commit()
    return await _fresh(db, Technician, tech.id)


async def update_technician(db: AsyncSession, tech: Technician, **kwargs) -> Technician:
    for k, v in kwargs.items():
        setattr(tech, k, v)
    await db.commit()
    return await _fresh(db, Technician, tech.id)


async def delete_technician(db: AsyncSession, tech: Technician) -> None:
    await db.delete(tech)
    await db.commit()


# ── Workorder ────────────────────────────────────────────

WORKORDER_SORT_KEYS = {
    "createdAt": Workorder.created_at,
    "title": Workorder.title,
    "status": Workorder.status,
}


async def _fresh(db: AsyncSession, model, pk):
    """Reload ``model`` row ``pk`` with every selectin relationship current.

    Objects created or changed in this session keep stale relationship
    state after commit; dropping the identity map forces a clean load.
    """
    db.expunge_all()
    return await db.get(model, pk)


def _build_item(data: WorkorderItemIn, position: int) -> WorkorderItem:
    item = WorkorderItem(
        position=position,
        config_id=data.config_id,
        detail=data.detail or "",
        start_date=data.start_date,
        end_date=data.end_date,
        owner_id=data.owner_id,
        approver_id=data.approver_id,
        status_approve_id=PENDING_ID,
        comment=data.comment,
    )
    item.attachments = [Attachment(seq=seq, url=url) for seq, url in enumerate(data.attachments)]
    return item


async def create_workorder(
    db: AsyncSession, title: str, status: str, items: list[WorkorderItemIn],
) -> Workorder:
    """Insert the workorder, its items and their attachments in one commit."""
    wo = Workorder(title=title, status=status)
    wo.items = [_build_item(data, position) for position, data in enumerate(items)]
    db.add(wo)
    await db.commit()
    return await _fresh(db, Workorder, wo.id)


async def get_workorder(db: AsyncSession, wo_id: str) -> Workorder | None:
    return await db.get(Workorder, wo_id)


async def update_workorder(
    db: AsyncSession, wo: Workorder, fields: dict, items: list[WorkorderItemIn] | None = None,
) -> Workorder:
    """Apply scalar ``fields``; when ``items`` is given, replace the whole item list."""
    for k, v in fields.items():
        setattr(wo, k, v)
    if items is not None:
        # delete-orphan cascade removes the old items and their attachments
        wo.items = [_build_item(data, position) for position, data in enumerate(items)]
    await db.commit()
    return await _fresh(db, Workorder, wo.id)


async def delete_workorder(db: AsyncSession, wo: Workorder) -> None:
    await db.delete(wo)
    await db.commit()


async def list_workorders(
    db: AsyncSession, page: int = 1, size: int = 10,
    title: str | None = None, status: str | None = None,
    start_date: datetime | None = None, end_date: datetime | None = None,
    sort_by: str = "createdAt", sort_order: str = "desc",
) -> tuple[list[Workorder], int]:
    stmt = select(Workorder)
    if title:
        stmt = stmt.where(Workorder.title.ilike(f"%{title}%"))
    if status:
        stmt = stmt.where(Workorder.status == status)
    if start_date or end_date:
        # An item overlaps [start_date, end_date] unless it ends before the
        # range starts or begins after it ends.
        overlap = []
        if start_date:
            overlap.append(WorkorderItem.end_date >= start_date)
        if end_date:
            overlap.append(WorkorderItem.start_date <= end_date)
        stmt = stmt.where(Workorder.items.any(and_(*overlap)))
    stmt = stmt.order_by(_order(WORKORDER_SORT_KEYS[sort_by], sort_order), Workorder.id)
    return await _paginate(db, stmt, page, size)


async def get_workorder_item(db: AsyncSession, item_id: str) -> WorkorderItem | None:
    return await db.get(WorkorderItem, item_id)


async def update_workorder_item_status(
    db: AsyncSession, item: WorkorderItem, status_approve_id: int, comment: str | None = None,
) -> WorkorderItem:
    item.status_approve_id = status_approve_id
    if comment is not None:
        item.comment = comment
    await db.commit()
    return await _fresh(db, WorkorderItem, item.id)


async def list_items_by_status(db: AsyncSession, status_approve_id: int) -> list[WorkorderItem]:
    result = await db.execute(
        select(WorkorderItem)
        .where(WorkorderItem.status_approve_id == status_approve_id)
        .order_by(WorkorderItem.start_date, WorkorderItem.position)
    )
    return list(result.scalars().all())


# ── UserLog ──────────────────────────────────────────────

async def create_user_log(
    db: AsyncSession, user_id: str, action: str, description: str,
    ip_address: str | None = None, user_agent: str | None = None,
    meta: dict | None = None,
) -> UserLog:
    log = UserLog(
        user_id=user_id, action=action, description=description,
        ip_address=ip_address, user_agent=user_agent, meta=meta,
    )
    db.add(log)
    await db.commit()
    return log


async def list_user_logs(db: AsyncSession, user_id: str) -> list[UserLog]:
    result = await db.execute(
        select(UserLog).where(UserLog.user_id == user_id).order_by(UserLog.created_at)
    )
    return list(result.scalars().all())
