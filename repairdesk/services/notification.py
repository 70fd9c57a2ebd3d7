"""Chat message templates for workorder events."""

from __future__ import annotations

from datetime import datetime

from repairdesk.config import NotificationConfig
from repairdesk.services.views import ItemView, WorkorderView

DIVIDER = "━━━━━━━━━━━━━━━━━━"


def format_date(value: datetime | None, config: NotificationConfig) -> str:
    """Render ``value`` with the configured format, optionally in Buddhist era years."""
    if value is None:
        return "-"
    fmt = config.date_format
    if config.buddhist_era:
        fmt = fmt.replace("%Y", str(value.year + 543))
    return value.strftime(fmt)


def _item_lines(item: ItemView, config: NotificationConfig) -> list[str]:
    lines = []
    if item.category:
        lines.append(f"   Category: {item.category}")
    if item.detail:
        lines.append(f"   Detail: {item.detail}")
    if item.start_date:
        lines.append(f"   Start: {format_date(item.start_date, config)}")
    if item.end_date:
        lines.append(f"   End: {format_date(item.end_date, config)}")
    if item.approver:
        lines.append(f"   Approver: {item.approver.name}")
    if item.owner:
        lines.append(f"   Owner: {item.owner.name}")
    if item.attachment_count:
        lines.append(f"   📎 Attachments: {item.attachment_count}")
    return lines


def compose_workorder_message(view: WorkorderView, config: NotificationConfig) -> str:
    lines = [
        "🔔 New repair request",
        "",
        f"📋 Title: {view.title}",
        f"📊 Status: {view.status}",
        f"📅 Created: {format_date(view.created_at, config)}",
        "",
        DIVIDER,
    ]
    for number, item in enumerate(view.items, start=1):
        lines.append("")
        lines.append(f"📌 Item {number}")
        lines.extend(_item_lines(item, config))
    return "\n".join(lines)


def compose_repair_reminder(items: list[ItemView], config: NotificationConfig) -> str:
    """Summary of approved items still waiting for repair. Empty when there are none."""
    if not items:
        return ""
    lines = [f"🛠 Approved repairs: {len(items)}", "", DIVIDER]
    for number, item in enumerate(items, start=1):
        lines.append("")
        lines.append(f"📌 {number}.")
        lines.extend(_item_lines(item, config))
    return "\n".join(lines)
