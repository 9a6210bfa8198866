from __future__ import annotations

import sqlalchemy as sa
from sqlmodel import Field

from leave_ledger.models.base import TimestampMixin, UUIDBase


class LeaveType(UUIDBase, TimestampMixin, table=True):
    """A category of absence measured in a single unit (e.g. Daily Leave)."""

    __tablename__ = "leave_type"

    name: str = Field(max_length=255)
    unit: str = Field(max_length=10, index=True)
    description: str | None = None
    is_sick_leave: bool = Field(default=False, sa_column_kwargs={"server_default": sa.false()})
