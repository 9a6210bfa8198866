# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, status

from leave_ledger.api.deps import AdminDep, AuthDep
from leave_ledger.db import SessionDep
from leave_ledger.schemas.leave_type import CreateLeaveTypePayload, LeaveTypeListResponse, LeaveTypeResponse
from leave_ledger.schemas.policy import LeavePolicyPayload, LeavePolicyResponse
from leave_ledger.services import leave_type as leave_type_service
from leave_ledger.services import policy as policy_service

leave_types_router = APIRouter(prefix="/leave-types", tags=["leave-types"])


@leave_types_router.post("", response_model=LeaveTypeResponse, status_code=status.HTTP_201_CREATED)
async def create_leave_type(
    payload: CreateLeaveTypePayload,
    session: SessionDep,
    auth: AdminDep,
) -> LeaveTypeResponse:
    """Create a leave type (admin only)."""
    return await leave_type_service.create_leave_type(session, payload)


@leave_types_router.get("", response_model=LeaveTypeListResponse)
async def list_leave_types(session: SessionDep, auth: AuthDep) -> LeaveTypeListResponse:
    """List all leave types."""
    return await leave_type_service.list_leave_types(session)


@leave_types_router.get("/{leave_type_id}", response_model=LeaveTypeResponse)
async def get_leave_type(leave_type_id: uuid.UUID, session: SessionDep, auth: AuthDep) -> LeaveTypeResponse:
    """Get a single leave type."""
    return await leave_type_service.get_leave_type(session, leave_type_id)


@leave_types_router.put("/{leave_type_id}/policy", response_model=LeavePolicyResponse)
async def upsert_leave_policy(
    leave_type_id: uuid.UUID,
    payload: LeavePolicyPayload,
    session: SessionDep,
    auth: AdminDep,
) -> LeavePolicyResponse:
    """Create or replace the entitlement policy of a leave type (admin only)."""
    return await policy_service.upsert_leave_policy(session, leave_type_id, payload)
