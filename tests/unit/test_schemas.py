from datetime import datetime

import pytest
from pydantic import ValidationError

from repairdesk.schemas import (
    WorkorderItemIn,
    WorkorderCreate,
    WorkorderUpdate,
    ConfigCreate,
    ConfigUpdate,
    TechnicianUpdate,
    TechnicianCreate,
    Pagination,
)
from repairdesk.schemas.workorder import parse_date_param


def test_item_accepts_camel_case():
    item = WorkorderItemIn.model_validate({
        "configId": "c1",
        "detail": "Leak",
        "startDate": "2024-01-01",
        "endDate": "2024-01-02T10:30:00",
        "ownerId": "u1",
        "approverId": "u2",
        "attachments": ["https://x/a.jpg"],
    })
    assert item.config_id == "c1"
    assert item.owner_id == "u1"
    assert item.attachments == ["https://x/a.jpg"]
    assert item.missing_fields() == []


def test_date_only_is_midnight():
    item = WorkorderItemIn.model_validate({"startDate": "2024-03-05"})
    assert item.start_date == datetime(2024, 3, 5, 0, 0)


def test_aware_datetime_stored_as_naive_utc():
    item = WorkorderItemIn.model_validate({"startDate": "2024-03-05T07:00:00+07:00"})
    assert item.start_date == datetime(2024, 3, 5, 0, 0)
    assert item.start_date.tzinfo is None


def test_missing_fields_reports_camel_case_names():
    item = WorkorderItemIn.model_validate({"detail": "  ", "configId": "c1"})
    assert item.missing_fields() == ["detail", "ownerId", "approverId", "startDate", "endDate"]


def test_invalid_date_rejected():
    with pytest.raises(ValidationError):
        WorkorderItemIn.model_validate({"startDate": "not-a-date"})


def test_workorder_create_requires_title():
    with pytest.raises(ValidationError):
        WorkorderCreate.model_validate({"title": "", "workorderItems": []})


def test_workorder_create_defaults():
    wo = WorkorderCreate.model_validate({"title": "Room 3"})
    assert wo.status is None
    assert wo.workorder_items == []


def test_workorder_update_tracks_present_fields():
    body = WorkorderUpdate.model_validate({"title": "New title"})
    assert body.model_fields_set == {"title"}
    assert body.workorder_items is None


def test_config_create_requires_name_and_type():
    with pytest.raises(ValidationError):
        ConfigCreate.model_validate({"name": "Plumbing"})
    cfg = ConfigCreate.model_validate({"name": "Plumbing", "type": "facility"})
    assert cfg.type == "facility"


def test_technician_create_requires_config_id():
    with pytest.raises(ValidationError):
        TechnicianCreate.model_validate({"name": "Somchai", "number": "081"})
    tech = TechnicianCreate.model_validate({"name": "Somchai", "number": "081", "configId": "c1"})
    assert tech.config_id == "c1"


def test_pagination_total_pages():
    assert Pagination.build(1, 10, 0).total_pages == 0
    assert Pagination.build(1, 10, 10).total_pages == 1
    assert Pagination.build(2, 10, 11).total_pages == 2
    assert Pagination.build(1, 10, 11).model_dump(by_alias=True)["totalPages"] == 2


def test_parse_date_param():
    assert parse_date_param("2024-01-15") == datetime(2024, 1, 15)
    assert parse_date_param("2024-01-15T12:00:00Z") == datetime(2024, 1, 15, 12, 0)
    with pytest.raises(ValueError):
        parse_date_param("15/01/2024")


def test_required_text_is_stripped():
    wo = WorkorderCreate.model_validate({"title": "  Room 3 "})
    assert wo.title == "Room 3"


def test_whitespace_only_required_text_rejected():
    with pytest.raises(ValidationError):
        WorkorderCreate.model_validate({"title": "   "})
    with pytest.raises(ValidationError):
        ConfigCreate.model_validate({"name": " ", "type": "facility"})
    with pytest.raises(ValidationError):
        TechnicianCreate.model_validate({"name": "Somchai", "number": "\t", "configId": "c1"})


def test_blank_partial_update_fields_become_none():
    assert ConfigUpdate.model_validate({"name": "  ", "type": " it "}).model_dump() == {
        "name": None, "type": "it",
    }
    assert TechnicianUpdate.model_validate({"configId": ""}).config_id is None
