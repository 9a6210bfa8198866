# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from leave_ledger.models.enums import LeaveUnit, RenewalPeriod

# ---------------------------------------------------------------------------
# Leave policies
# ---------------------------------------------------------------------------


class LeavePolicyPayload(BaseModel):
    """Request body for creating or updating the policy of a leave type."""

    entitlement_amount: Decimal = Field(ge=0, max_digits=12, decimal_places=4)
    entitlement_unit: LeaveUnit
    renewal_period: RenewalPeriod = RenewalPeriod.YEARLY


class LeavePolicyResponse(BaseModel):
    """Response schema for a leave policy."""

    id: uuid.UUID
    leave_type_id: uuid.UUID
    leave_type_name: str
    is_sick_leave: bool
    entitlement_amount: Decimal
    entitlement_unit: LeaveUnit
    renewal_period: RenewalPeriod
    created_at: datetime
    updated_at: datetime


class LeavePolicyListResponse(BaseModel):
    """All leave policies."""

    items: list[LeavePolicyResponse]
    total: int


# ---------------------------------------------------------------------------
# Employee overrides
# ---------------------------------------------------------------------------


class EmployeeLeaveSettingPayload(BaseModel):
    """Request body for setting a custom entitlement for one employee."""

    leave_type_id: uuid.UUID
    custom_entitlement_amount: Decimal = Field(ge=0, max_digits=12, decimal_places=4)
    custom_entitlement_unit: LeaveUnit


class EmployeeLeaveSettingResponse(BaseModel):
    """Response schema for an employee entitlement override."""

    id: uuid.UUID
    employee_id: uuid.UUID
    leave_type_id: uuid.UUID
    custom_entitlement_amount: Decimal
    custom_entitlement_unit: LeaveUnit
    updated_at: datetime


class EmployeeLeaveSettingListResponse(BaseModel):
    """All overrides for an employee."""

    items: list[EmployeeLeaveSettingResponse]
    total: int
