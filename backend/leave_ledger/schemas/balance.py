# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from leave_ledger.models.enums import LeaveUnit


class BalanceResponse(BaseModel):
    """Current balance for one employee and leave type."""

    id: uuid.UUID
    employee_id: uuid.UUID
    leave_type_id: uuid.UUID
    leave_type_name: str
    balance_amount: Decimal
    balance_unit: LeaveUnit
    updated_at: datetime


class BalanceBreakdownResponse(BalanceResponse):
    """Balance with a breakdown of the current calendar year."""

    current_year_entitlement: Decimal
    used_this_year: Decimal
    carryover_from_previous_years: Decimal


class BalanceListResponse(BaseModel):
    """All balances for an employee."""

    items: list[BalanceBreakdownResponse]
    total: int
