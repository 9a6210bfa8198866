# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter

from leave_ledger.api.deps import AuthDep, ensure_self_or_admin
from leave_ledger.db import SessionDep
from leave_ledger.schemas.balance import BalanceListResponse, BalanceResponse
from leave_ledger.services import balance as balance_service

employee_balance_router = APIRouter(
    prefix="/employees/{employee_id}/balances",
    tags=["balances"],
)


@employee_balance_router.get("", response_model=BalanceListResponse)
async def list_employee_balances(
    employee_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
) -> BalanceListResponse:
    """List all balances of an employee with the current-year breakdown."""
    ensure_self_or_admin(auth, employee_id)
    return await balance_service.list_employee_balances(session, employee_id)


@employee_balance_router.get("/{leave_type_id}", response_model=BalanceResponse)
async def get_balance(
    employee_id: uuid.UUID,
    leave_type_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
) -> BalanceResponse:
    """Get the balance for one leave type, creating it from the entitlement on first access."""
    ensure_self_or_admin(auth, employee_id)
    return await balance_service.get_balance(session, employee_id, leave_type_id)
