# ruff: noqa: TC003
from __future__ import annotations

import logging
import uuid
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlmodel import col

from leave_ledger.config import get_settings
from leave_ledger.exceptions import (
    InsufficientBalanceError,
    InvalidTransitionError,
    NotFoundError,
    OverlapError,
    ValidationError,
)
from leave_ledger.models.base import now_utc
from leave_ledger.models.enums import LeaveRequestStatus, LeaveUnit, ReviewDecision
from leave_ledger.models.request import LeaveRequest
from leave_ledger.schemas.request import LeaveRequestListResponse, LeaveRequestResponse
from leave_ledger.services.balance import convert_amount, credit_balance, debit_balance, get_or_create_balance
from leave_ledger.services.duration import compute_duration, normalize_to_utc
from leave_ledger.services.employee import require_active_employee
from leave_ledger.services.leave_type import get_or_create_leave_type_for_unit

if TYPE_CHECKING:
    from datetime import datetime

    from sqlalchemy.ext.asyncio import AsyncSession

    from leave_ledger.schemas.request import CreateLeaveRequestPayload

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _build_request_response(request: LeaveRequest) -> LeaveRequestResponse:
    """Map a request model to its response schema."""
    return LeaveRequestResponse(
        id=request.id,
        employee_id=request.employee_id,
        leave_type_id=request.leave_type_id,
        start_at=request.start_at,
        end_at=request.end_at,
        duration_amount=Decimal(request.duration_amount),
        duration_unit=LeaveUnit(request.duration_unit),
        reason=request.reason,
        status=LeaveRequestStatus(request.status),
        admin_comment=request.admin_comment,
        reviewed_at=request.reviewed_at,
        reviewed_by=request.reviewed_by,
        created_at=request.created_at,
        updated_at=request.updated_at,
    )


async def _get_request_or_404(
    session: AsyncSession,
    request_id: uuid.UUID,
    for_update: bool = False,
) -> LeaveRequest:
    """Fetch a request by ID, optionally locking the row. Raises NotFoundError if absent."""
    request = await session.get(LeaveRequest, request_id, with_for_update=for_update)
    if request is None:
        raise NotFoundError(f"Leave request {request_id} not found")
    return request


async def _check_approved_overlap(
    session: AsyncSession,
    employee_id: uuid.UUID,
    start_at: datetime,
    end_at: datetime,
    exclude_id: uuid.UUID | None = None,
) -> None:
    """Raise OverlapError if an approved request of the employee touches the window.

    Bounds are inclusive: existing.start_at <= new.end_at AND existing.end_at >= new.start_at.
    Pending and rejected requests never block. ``exclude_id`` leaves one request
    out of the check, for re-approving a request that is already stored.
    """
    filters = [
        col(LeaveRequest.employee_id) == employee_id,
        col(LeaveRequest.status) == LeaveRequestStatus.APPROVED.value,
        col(LeaveRequest.start_at) <= end_at,
        col(LeaveRequest.end_at) >= start_at,
    ]
    if exclude_id is not None:
        filters.append(col(LeaveRequest.id) != exclude_id)

    result = await session.execute(select(col(LeaveRequest.id)).where(*filters).limit(1))
    if result.scalar_one_or_none() is not None:
        raise OverlapError("Leave request overlaps with an existing approved leave")


async def _ensure_sufficient_balance(
    session: AsyncSession,
    employee_id: uuid.UUID,
    leave_type_id: uuid.UUID,
    amount: Decimal,
    unit: LeaveUnit,
) -> None:
    balance = await get_or_create_balance(session, employee_id, leave_type_id, unit)
    needed = convert_amount(amount, unit, LeaveUnit(balance.balance_unit))
    if Decimal(balance.balance_amount) < needed:
        raise InsufficientBalanceError(
            f"Insufficient leave balance: {needed} {balance.balance_unit} requested, "
            f"{balance.balance_amount} {balance.balance_unit} available"
        )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def create_leave_request(
    session: AsyncSession,
    payload: CreateLeaveRequestPayload,
) -> LeaveRequestResponse:
    """Create a PENDING leave request.

    Flow:
    1. Verify the employee exists and is active
    2. Resolve the leave type for the requested unit (created on demand)
    3. Validate start < end
    4. Reject overlap with the employee's approved requests
    5. Price the window in the leave type's unit
    6. Check the balance covers the duration (balance row created on demand)
    7. Persist as PENDING and commit

    Nothing is debited here; the balance only moves on approval.
    """
    await require_active_employee(payload.employee_id)

    leave_type = await get_or_create_leave_type_for_unit(session, payload.unit)
    unit = LeaveUnit(leave_type.unit)

    start_at = normalize_to_utc(payload.start_at)
    end_at = normalize_to_utc(payload.end_at)
    if start_at >= end_at:
        raise ValidationError("Start date must be before end date")

    await _check_approved_overlap(session, payload.employee_id, start_at, end_at)

    duration = compute_duration(payload.start_at, payload.end_at, unit)

    await _ensure_sufficient_balance(session, payload.employee_id, leave_type.id, duration, unit)

    leave_request = LeaveRequest(
        employee_id=payload.employee_id,
        leave_type_id=leave_type.id,
        start_at=start_at,
        end_at=end_at,
        duration_amount=duration,
        duration_unit=unit.value,
        reason=payload.reason,
        status=LeaveRequestStatus.PENDING.value,
    )
    session.add(leave_request)
    await session.commit()
    await session.refresh(leave_request)

    logger.info(
        "Created leave request %s for employee=%s: %s %s",
        leave_request.id,
        payload.employee_id,
        duration,
        unit.value,
    )
    return _build_request_response(leave_request)


async def review_leave_request(
    session: AsyncSession,
    request_id: uuid.UUID,
    decision: ReviewDecision,
    admin_comment: str | None = None,
    reviewer_id: uuid.UUID | None = None,
) -> LeaveRequestResponse:
    """Approve or reject a leave request and apply its ledger effect.

    Only PENDING requests are reviewable unless ``allow_re_review`` is set.
    With re-review enabled a decision can be flipped and the ledger is
    reconciled: APPROVED -> REJECTED credits the duration back,
    REJECTED -> APPROVED debits it again after the overlap and balance checks
    that creation applies. The request row is locked while it is reviewed. Repeating
    the current decision is rejected either way.
    """
    leave_request = await _get_request_or_404(session, request_id, for_update=True)
    current = LeaveRequestStatus(leave_request.status)
    target = decision.target_status

    if current != LeaveRequestStatus.PENDING:
        if not get_settings().allow_re_review:
            raise InvalidTransitionError("Only pending leave requests can be reviewed")
        if current == target:
            raise InvalidTransitionError(f"Leave request is already {current.value.lower()}")

    amount = Decimal(leave_request.duration_amount)
    unit = LeaveUnit(leave_request.duration_unit)

    if target == LeaveRequestStatus.APPROVED:
        if current == LeaveRequestStatus.REJECTED:
            await _check_approved_overlap(
                session,
                leave_request.employee_id,
                normalize_to_utc(leave_request.start_at),
                normalize_to_utc(leave_request.end_at),
                exclude_id=leave_request.id,
            )
            await _ensure_sufficient_balance(session, leave_request.employee_id, leave_request.leave_type_id, amount, unit)
        await debit_balance(session, leave_request.employee_id, leave_request.leave_type_id, amount, unit)
    elif current == LeaveRequestStatus.APPROVED:
        await credit_balance(session, leave_request.employee_id, leave_request.leave_type_id, amount, unit)

    now = now_utc()
    leave_request.status = target.value
    leave_request.admin_comment = admin_comment
    leave_request.reviewed_at = now
    leave_request.reviewed_by = reviewer_id
    leave_request.updated_at = now

    await session.commit()
    await session.refresh(leave_request)

    logger.info("Leave request %s: %s -> %s", leave_request.id, current.value, target.value)
    return _build_request_response(leave_request)


async def approve_leave_request(
    session: AsyncSession,
    request_id: uuid.UUID,
    admin_comment: str | None = None,
    reviewer_id: uuid.UUID | None = None,
) -> LeaveRequestResponse:
    """Approve a request, debiting its duration from the balance."""
    return await review_leave_request(session, request_id, ReviewDecision.APPROVE, admin_comment, reviewer_id)


async def reject_leave_request(
    session: AsyncSession,
    request_id: uuid.UUID,
    admin_comment: str | None = None,
    reviewer_id: uuid.UUID | None = None,
) -> LeaveRequestResponse:
    """Reject a request. A pending request leaves the balance untouched."""
    return await review_leave_request(session, request_id, ReviewDecision.REJECT, admin_comment, reviewer_id)


async def get_leave_request(session: AsyncSession, request_id: uuid.UUID) -> LeaveRequestResponse:
    """Get a single request by ID."""
    return _build_request_response(await _get_request_or_404(session, request_id))


async def list_leave_requests(
    session: AsyncSession,
    employee_id: uuid.UUID | None = None,
    status_filter: LeaveRequestStatus | None = None,
    offset: int = 0,
    limit: int = 50,
) -> LeaveRequestListResponse:
    """List requests with optional filters, newest first."""
    filters = []
    if employee_id is not None:
        filters.append(col(LeaveRequest.employee_id) == employee_id)
    if status_filter is not None:
        filters.append(col(LeaveRequest.status) == status_filter.value)

    count_result = await session.execute(select(func.count()).select_from(LeaveRequest).where(*filters))
    total = count_result.scalar_one()

    result = await session.execute(
        select(LeaveRequest)
        .where(*filters)
        .order_by(col(LeaveRequest.created_at).desc())
        .offset(offset)
        .limit(limit)
    )
    requests = list(result.scalars().all())

    return LeaveRequestListResponse(
        items=[_build_request_response(r) for r in requests],
        total=total,
    )
