import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from repairdesk.db import crud
from repairdesk.errors import NotFoundError, ValidationError
from repairdesk.models import Base
from repairdesk.schemas import WorkorderItemIn
from repairdesk.services.validation import validate_sort, validate_workorder_items


@pytest_asyncio.fixture
async def db():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
    await engine.dispose()


@pytest_asyncio.fixture
async def refs(db):
    await crud.create_config_type(db, "facility")
    config = await crud.create_config(db, "Plumbing", "facility")
    owner = await crud.create_user(db, "owner@example.com", "Owner")
    approver = await crud.create_user(db, "approver@example.com", "Approver")
    retired = await crud.create_user(db, "retired@example.com", "Retired", active=False)
    return {"config": config.id, "owner": owner.id, "approver": approver.id, "retired": retired.id}


def _item(refs, **overrides):
    data = {
        "configId": refs["config"],
        "detail": "Leak",
        "startDate": "2024-01-10",
        "endDate": "2024-01-11",
        "ownerId": refs["owner"],
        "approverId": refs["approver"],
    }
    data.update(overrides)
    return WorkorderItemIn.model_validate({k: v for k, v in data.items() if v is not None})


async def test_valid_items_pass(db, refs):
    await validate_workorder_items(db, [_item(refs), _item(refs, detail="Broken door")])


async def test_empty_list_rejected(db):
    with pytest.raises(ValidationError) as exc:
        await validate_workorder_items(db, [])
    assert exc.value.status_code == 400


async def test_missing_fields_reported_for_every_item(db, refs):
    items = [_item(refs, detail=None), _item(refs), _item(refs, ownerId=None, endDate=None)]
    with pytest.raises(ValidationError) as exc:
        await validate_workorder_items(db, items)
    assert exc.value.details["missingFields"] == [
        {"index": 0, "missing": ["detail"]},
        {"index": 2, "missing": ["ownerId", "endDate"]},
    ]


async def test_reversed_dates_rejected(db, refs):
    with pytest.raises(ValidationError) as exc:
        await validate_workorder_items(db, [_item(refs, startDate="2024-02-01", endDate="2024-01-01")])
    assert exc.value.details["invalidItems"] == [0]


async def test_inactive_and_unknown_users_listed(db, refs):
    items = [_item(refs, ownerId=refs["retired"]), _item(refs, approverId="nobody")]
    with pytest.raises(ValidationError) as exc:
        await validate_workorder_items(db, items)
    assert exc.value.details["invalidUserIds"] == sorted([refs["retired"], "nobody"])


async def test_unknown_config_is_not_found(db, refs):
    with pytest.raises(NotFoundError) as exc:
        await validate_workorder_items(db, [_item(refs, configId="missing-config")])
    assert exc.value.details["configId"] == "missing-config"


def test_validate_sort_normalises_order():
    assert validate_sort("name", "ASC", {"name": None}) == "asc"


def test_validate_sort_rejects_unknown_values():
    with pytest.raises(ValidationError) as exc:
        validate_sort("bogus", "asc", {"name": None})
    assert exc.value.details["sortBy"] == "bogus"
    with pytest.raises(ValidationError) as exc:
        validate_sort("name", "sideways", {"name": None})
    assert exc.value.details["sortOrder"] == "sideways"
