# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Query, status

from leave_ledger.api.deps import AdminDep, AuthDep, ensure_self_or_admin
from leave_ledger.db import SessionDep
from leave_ledger.models.enums import LeaveRequestStatus
from leave_ledger.schemas.request import (
    CreateLeaveRequestPayload,
    DecisionPayload,
    LeaveRequestListResponse,
    LeaveRequestResponse,
    ReviewPayload,
)
from leave_ledger.services import request as request_service

requests_router = APIRouter(prefix="/requests", tags=["requests"])


@requests_router.post("", response_model=LeaveRequestResponse, status_code=status.HTTP_201_CREATED)
async def create_leave_request(
    payload: CreateLeaveRequestPayload,
    session: SessionDep,
    auth: AuthDep,
) -> LeaveRequestResponse:
    """Submit a new leave request."""
    ensure_self_or_admin(auth, payload.employee_id)
    return await request_service.create_leave_request(session, payload)


@requests_router.get("", response_model=LeaveRequestListResponse)
async def list_leave_requests(
    session: SessionDep,
    auth: AuthDep,
    employee_id: uuid.UUID | None = Query(default=None),
    status_filter: LeaveRequestStatus | None = Query(default=None, alias="status"),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> LeaveRequestListResponse:
    """List leave requests. Non-admins only see their own."""
    if not auth.is_admin:
        employee_id = auth.user_id
    return await request_service.list_leave_requests(session, employee_id, status_filter, offset, limit)


@requests_router.get("/{request_id}", response_model=LeaveRequestResponse)
async def get_leave_request(
    request_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
) -> LeaveRequestResponse:
    """Get a single leave request."""
    leave_request = await request_service.get_leave_request(session, request_id)
    ensure_self_or_admin(auth, leave_request.employee_id)
    return leave_request


@requests_router.post("/{request_id}/review", response_model=LeaveRequestResponse)
async def review_leave_request(
    request_id: uuid.UUID,
    payload: ReviewPayload,
    session: SessionDep,
    auth: AdminDep,
) -> LeaveRequestResponse:
    """Approve or reject a leave request (admin only)."""
    return await request_service.review_leave_request(
        session, request_id, payload.decision, payload.admin_comment, auth.user_id
    )


@requests_router.post("/{request_id}/approve", response_model=LeaveRequestResponse)
async def approve_leave_request(
    request_id: uuid.UUID,
    session: SessionDep,
    auth: AdminDep,
    payload: DecisionPayload | None = None,
) -> LeaveRequestResponse:
    """Approve a pending leave request (admin only)."""
    comment = payload.admin_comment if payload else None
    return await request_service.approve_leave_request(session, request_id, comment, auth.user_id)


@requests_router.post("/{request_id}/reject", response_model=LeaveRequestResponse)
async def reject_leave_request(
    request_id: uuid.UUID,
    session: SessionDep,
    auth: AdminDep,
    payload: DecisionPayload | None = None,
) -> LeaveRequestResponse:
    """Reject a pending leave request (admin only)."""
    comment = payload.admin_comment if payload else None
    return await request_service.reject_leave_request(session, request_id, comment, auth.user_id)
