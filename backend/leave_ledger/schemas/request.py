# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from leave_ledger.models.enums import LeaveRequestStatus, LeaveUnit, ReviewDecision

# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


class CreateLeaveRequestPayload(BaseModel):
    """Request body for submitting a new leave request.

    The leave type is selected by unit: one daily and one hourly type exist.
    Ordering of start_at and end_at is checked by the service, not here, so
    that the same rule applies to non-HTTP callers.
    """

    employee_id: uuid.UUID
    unit: LeaveUnit
    start_at: datetime
    end_at: datetime
    reason: str | None = Field(default=None, max_length=1000)


class ReviewPayload(BaseModel):
    """Request body for reviewing a leave request."""

    decision: ReviewDecision
    admin_comment: str | None = Field(default=None, max_length=1000)


class DecisionPayload(BaseModel):
    """Request body for the approve/reject shortcuts."""

    admin_comment: str | None = Field(default=None, max_length=1000)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class LeaveRequestResponse(BaseModel):
    """Response schema for a single leave request."""

    id: uuid.UUID
    employee_id: uuid.UUID
    leave_type_id: uuid.UUID
    start_at: datetime
    end_at: datetime
    duration_amount: Decimal
    duration_unit: LeaveUnit
    reason: str | None
    status: LeaveRequestStatus
    admin_comment: str | None
    reviewed_at: datetime | None
    reviewed_by: uuid.UUID | None
    created_at: datetime
    updated_at: datetime


class LeaveRequestListResponse(BaseModel):
    """Paginated list of leave requests."""

    items: list[LeaveRequestResponse]
    total: int
