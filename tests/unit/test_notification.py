from datetime import datetime

from repairdesk.config import NotificationConfig
from repairdesk.services.notification import (
    compose_repair_reminder,
    compose_workorder_message,
    format_date,
)
from repairdesk.services.views import ItemView, PersonView, WorkorderView

GREGORIAN = NotificationConfig(buddhist_era=False, date_format="%d/%m/%Y %H:%M")
BUDDHIST = NotificationConfig(buddhist_era=True, date_format="%d/%m/%Y")


def _view(*items):
    return WorkorderView(
        id="wo1", title="Room 3", status="PENDING",
        created_at=datetime(2024, 1, 9, 8, 30), items=list(items),
    )


def _item(item_id="i1", detail="Leak", **kwargs):
    return ItemView(id=item_id, category="Plumbing", detail=detail, **kwargs)


def test_format_date_gregorian():
    assert format_date(datetime(2024, 1, 9, 8, 30), GREGORIAN) == "09/01/2024 08:30"


def test_format_date_buddhist_era():
    assert format_date(datetime(2024, 1, 9), BUDDHIST) == "09/01/2567"


def test_format_date_none():
    assert format_date(None, GREGORIAN) == "-"


def test_workorder_message_header_and_items():
    text = compose_workorder_message(_view(
        _item(
            start_date=datetime(2024, 1, 10), end_date=datetime(2024, 1, 12),
            owner=PersonView("u1", "Olivia Owner"), approver=PersonView("u2", "Adam Approver"),
            attachment_count=2,
        ),
        _item("i2", detail="Broken door"),
    ), GREGORIAN)

    assert text.startswith("🔔 New repair request")
    assert "📋 Title: Room 3" in text
    assert "📊 Status: PENDING" in text
    assert "📅 Created: 09/01/2024 08:30" in text
    assert "📌 Item 1" in text and "📌 Item 2" in text
    assert text.index("Leak") < text.index("Broken door")
    assert "   Approver: Adam Approver" in text
    assert "   Owner: Olivia Owner" in text
    assert "   📎 Attachments: 2" in text
    assert "   Start: 10/01/2024 00:00" in text


def test_workorder_message_skips_empty_fields():
    text = compose_workorder_message(_view(_item()), GREGORIAN)
    assert "Approver:" not in text
    assert "Attachments:" not in text
    assert "Start:" not in text


def test_repair_reminder_empty():
    assert compose_repair_reminder([], GREGORIAN) == ""


def test_repair_reminder_lists_items():
    text = compose_repair_reminder([_item(), _item("i2", detail="Broken door")], GREGORIAN)
    assert text.startswith("🛠 Approved repairs: 2")
    assert "📌 1." in text and "📌 2." in text
    assert "   Detail: Broken door" in text
