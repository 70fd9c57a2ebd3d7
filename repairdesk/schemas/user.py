from __future__ import annotations

from datetime import datetime

from repairdesk.schemas.common import CamelModel


class UserSummary(CamelModel):
    id: str
    email: str
    first_name: str = ""
    last_name: str = ""


class UserRead(UserSummary):
    active: bool
    created_at: datetime
