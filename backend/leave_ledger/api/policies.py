# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter

from leave_ledger.api.deps import AdminDep, AuthDep, ensure_self_or_admin
from leave_ledger.db import SessionDep
from leave_ledger.schemas.policy import (
    EmployeeLeaveSettingListResponse,
    EmployeeLeaveSettingPayload,
    EmployeeLeaveSettingResponse,
    LeavePolicyListResponse,
    LeavePolicyPayload,
    LeavePolicyResponse,
)
from leave_ledger.services import policy as policy_service

policies_router = APIRouter(prefix="/leave-policies", tags=["policies"])

leave_settings_router = APIRouter(
    prefix="/employees/{employee_id}/leave-settings",
    tags=["policies"],
)


@policies_router.get("", response_model=LeavePolicyListResponse)
async def list_leave_policies(session: SessionDep, auth: AuthDep) -> LeavePolicyListResponse:
    """List all leave policies."""
    return await policy_service.list_leave_policies(session)


@policies_router.put("/{policy_id}", response_model=LeavePolicyResponse)
async def update_leave_policy(
    policy_id: uuid.UUID,
    payload: LeavePolicyPayload,
    session: SessionDep,
    auth: AdminDep,
) -> LeavePolicyResponse:
    """Update a leave policy (admin only)."""
    return await policy_service.update_leave_policy(session, policy_id, payload)


@leave_settings_router.get("", response_model=EmployeeLeaveSettingListResponse)
async def list_employee_leave_settings(
    employee_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
) -> EmployeeLeaveSettingListResponse:
    """List the entitlement overrides of an employee."""
    ensure_self_or_admin(auth, employee_id)
    return await policy_service.list_employee_leave_settings(session, employee_id)


@leave_settings_router.put("", response_model=EmployeeLeaveSettingResponse)
async def upsert_employee_leave_setting(
    employee_id: uuid.UUID,
    payload: EmployeeLeaveSettingPayload,
    session: SessionDep,
    auth: AdminDep,
) -> EmployeeLeaveSettingResponse:
    """Set a custom entitlement for an employee (admin only)."""
    return await policy_service.upsert_employee_leave_setting(session, employee_id, payload)
