"""Shared schema pieces: camelCase base model and response envelopes."""

from __future__ import annotations

import math
from typing import Annotated, Generic, TypeVar

from pydantic import AfterValidator, BaseModel
from pydantic.alias_generators import to_camel

T = TypeVar("T")


def required_text(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


# Surrounding whitespace is dropped; what remains must be non-empty.
RequiredStr = Annotated[str, AfterValidator(required_text)]


def blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


# Partial updates: a blank value counts as "not supplied".
OptionalStr = Annotated[str | None, AfterValidator(blank_to_none)]


class CamelModel(BaseModel):
    """Base for every request/response schema (camelCase on the wire)."""

    model_config = {
        "from_attributes": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class Pagination(CamelModel):
    page: int
    size: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, page: int, size: int, total: int) -> "Pagination":
        return cls(page=page, size=size, total=total, total_pages=math.ceil(total / size) if size else 0)


class DataResponse(CamelModel, Generic[T]):
    success: bool = True
    message: str = ""
    data: T


class PageResponse(CamelModel, Generic[T]):
    success: bool = True
    data: list[T]
    pagination: Pagination


class MessageResponse(CamelModel):
    success: bool = True
    message: str = ""
