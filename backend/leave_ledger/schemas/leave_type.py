# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from leave_ledger.models.enums import LeaveUnit


class CreateLeaveTypePayload(BaseModel):
    """Request body for creating a leave type."""

    name: str = Field(min_length=1, max_length=255)
    unit: LeaveUnit
    description: str | None = Field(default=None, max_length=1000)
    is_sick_leave: bool = False


class LeaveTypeResponse(BaseModel):
    """Response schema for a leave type."""

    id: uuid.UUID
    name: str
    unit: LeaveUnit
    description: str | None
    is_sick_leave: bool
    created_at: datetime


class LeaveTypeListResponse(BaseModel):
    """All configured leave types."""

    items: list[LeaveTypeResponse]
    total: int
