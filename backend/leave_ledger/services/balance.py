# ruff: noqa: TC003
from __future__ import annotations

import logging
import uuid
from datetime import UTC, date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlmodel import col

from leave_ledger.config import get_settings
from leave_ledger.exceptions import PolicyMissingError
from leave_ledger.models.balance import LeaveBalance
from leave_ledger.models.base import now_utc
from leave_ledger.models.enums import LeaveRequestStatus, LeaveUnit
from leave_ledger.models.leave_type import LeaveType
from leave_ledger.models.request import LeaveRequest
from leave_ledger.schemas.balance import BalanceBreakdownResponse, BalanceListResponse, BalanceResponse
from leave_ledger.services.duration import quantize_amount
from leave_ledger.services.employee import require_employee
from leave_ledger.services.entitlement import lookup_entitlement
from leave_ledger.services.leave_type import get_leave_type_or_404

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Unit helpers
# ---------------------------------------------------------------------------


def convert_amount(amount: Decimal, from_unit: LeaveUnit, to_unit: LeaveUnit) -> Decimal:
    """Convert an amount between hours and days using the configured hours per day."""
    if from_unit == to_unit:
        return amount
    hours_per_day = get_settings().hours_per_day
    if from_unit == LeaveUnit.HOUR:
        return quantize_amount(amount / hours_per_day)
    return quantize_amount(amount * hours_per_day)


def default_entitlement(unit: LeaveUnit) -> Decimal:
    """Last-resort entitlement when neither an override nor a policy exists."""
    settings = get_settings()
    if unit == LeaveUnit.DAY:
        return settings.default_day_entitlement
    return settings.default_hour_entitlement


async def _entitlement_in_unit(
    session: AsyncSession,
    employee_id: uuid.UUID,
    leave_type_id: uuid.UUID,
    unit: LeaveUnit,
) -> Decimal:
    """Resolve the entitlement and express it in ``unit``, falling back to the default."""
    try:
        entitlement = await lookup_entitlement(session, employee_id, leave_type_id)
    except PolicyMissingError:
        fallback = default_entitlement(unit)
        logger.warning(
            "No entitlement configured for employee=%s leave_type=%s; using default %s %s",
            employee_id,
            leave_type_id,
            fallback,
            unit.value,
        )
        return fallback
    return convert_amount(entitlement.amount, entitlement.unit, unit)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _build_balance_response(balance: LeaveBalance, leave_type: LeaveType) -> BalanceResponse:
    """Map a balance row to its response schema."""
    return BalanceResponse(
        id=balance.id,
        employee_id=balance.employee_id,
        leave_type_id=balance.leave_type_id,
        leave_type_name=leave_type.name,
        balance_amount=Decimal(balance.balance_amount),
        balance_unit=LeaveUnit(balance.balance_unit),
        updated_at=balance.updated_at,
    )


async def _find_balance(
    session: AsyncSession,
    employee_id: uuid.UUID,
    leave_type_id: uuid.UUID,
) -> LeaveBalance | None:
    result = await session.execute(
        select(LeaveBalance)
        .where(
            col(LeaveBalance.employee_id) == employee_id,
            col(LeaveBalance.leave_type_id) == leave_type_id,
        )
        .with_for_update()
    )
    return result.scalar_one_or_none()


async def _apply_delta(
    session: AsyncSession,
    employee_id: uuid.UUID,
    leave_type_id: uuid.UUID,
    amount: Decimal,
    unit: LeaveUnit,
    sign: int,
) -> LeaveBalance:
    balance = await get_or_create_balance(session, employee_id, leave_type_id, unit)
    delta = convert_amount(amount, unit, LeaveUnit(balance.balance_unit))
    balance.balance_amount = quantize_amount(Decimal(balance.balance_amount) + sign * delta)
    balance.updated_at = now_utc()
    await session.flush()
    return balance


# ---------------------------------------------------------------------------
# Ledger operations
#
# These run inside the caller's transaction: they flush but never commit.
# ---------------------------------------------------------------------------


async def get_or_create_balance(
    session: AsyncSession,
    employee_id: uuid.UUID,
    leave_type_id: uuid.UUID,
    default_unit: LeaveUnit,
) -> LeaveBalance:
    """Return the balance row for the pair, creating it from the entitlement if absent.

    The row is locked with SELECT ... FOR UPDATE where the database supports it.
    """
    balance = await _find_balance(session, employee_id, leave_type_id)
    if balance is not None:
        return balance

    amount = await _entitlement_in_unit(session, employee_id, leave_type_id, default_unit)
    balance = LeaveBalance(
        employee_id=employee_id,
        leave_type_id=leave_type_id,
        balance_amount=amount,
        balance_unit=default_unit.value,
    )
    session.add(balance)
    await session.flush()
    logger.info(
        "Created balance employee=%s leave_type=%s amount=%s %s",
        employee_id,
        leave_type_id,
        amount,
        default_unit.value,
    )
    return balance


async def debit_balance(
    session: AsyncSession,
    employee_id: uuid.UUID,
    leave_type_id: uuid.UUID,
    amount: Decimal,
    unit: LeaveUnit,
) -> LeaveBalance:
    """Subtract an approved duration from the balance, converting units if needed.

    No floor is enforced here; sufficiency is checked before a request exists.
    """
    balance = await _apply_delta(session, employee_id, leave_type_id, amount, unit, sign=-1)
    logger.info(
        "Debited %s %s from employee=%s leave_type=%s; balance now %s %s",
        amount,
        unit.value,
        employee_id,
        leave_type_id,
        balance.balance_amount,
        balance.balance_unit,
    )
    return balance


async def credit_balance(
    session: AsyncSession,
    employee_id: uuid.UUID,
    leave_type_id: uuid.UUID,
    amount: Decimal,
    unit: LeaveUnit,
) -> LeaveBalance:
    """Add a duration back to the balance, reversing an earlier debit."""
    balance = await _apply_delta(session, employee_id, leave_type_id, amount, unit, sign=1)
    logger.info(
        "Credited %s %s to employee=%s leave_type=%s; balance now %s %s",
        amount,
        unit.value,
        employee_id,
        leave_type_id,
        balance.balance_amount,
        balance.balance_unit,
    )
    return balance


# ---------------------------------------------------------------------------
# Read path
# ---------------------------------------------------------------------------


async def get_balance(
    session: AsyncSession,
    employee_id: uuid.UUID,
    leave_type_id: uuid.UUID,
) -> BalanceResponse:
    """Return the balance for an employee and leave type, creating it on first access."""
    await require_employee(employee_id)
    leave_type = await get_leave_type_or_404(session, leave_type_id)

    balance = await get_or_create_balance(session, employee_id, leave_type_id, LeaveUnit(leave_type.unit))
    await session.commit()
    return _build_balance_response(balance, leave_type)


async def _used_in_year(
    session: AsyncSession,
    balance: LeaveBalance,
    year: int,
) -> Decimal:
    """Sum approved durations starting in ``year``, expressed in the balance unit."""
    year_start = datetime(year, 1, 1, tzinfo=UTC)
    next_year_start = datetime(year + 1, 1, 1, tzinfo=UTC)
    result = await session.execute(
        select(LeaveRequest).where(
            col(LeaveRequest.employee_id) == balance.employee_id,
            col(LeaveRequest.leave_type_id) == balance.leave_type_id,
            col(LeaveRequest.status) == LeaveRequestStatus.APPROVED.value,
            col(LeaveRequest.start_at) >= year_start,
            col(LeaveRequest.start_at) < next_year_start,
        )
    )
    balance_unit = LeaveUnit(balance.balance_unit)
    used = Decimal(0)
    for request in result.scalars().all():
        used += convert_amount(Decimal(request.duration_amount), LeaveUnit(request.duration_unit), balance_unit)
    return used


async def list_employee_balances(
    session: AsyncSession,
    employee_id: uuid.UUID,
    as_of: date | None = None,
) -> BalanceListResponse:
    """List every balance row of an employee with a current-year breakdown.

    Carryover is whatever the balance holds beyond this year's entitlement
    once this year's approved usage is added back, floored at zero.
    """
    await require_employee(employee_id)
    year = (as_of or datetime.now(UTC).date()).year

    result = await session.execute(
        select(LeaveBalance, LeaveType)
        .join(LeaveType, col(LeaveType.id) == col(LeaveBalance.leave_type_id))
        .where(col(LeaveBalance.employee_id) == employee_id)
        .order_by(col(LeaveType.name))
    )

    items: list[BalanceBreakdownResponse] = []
    for balance, leave_type in result.all():
        balance_unit = LeaveUnit(balance.balance_unit)
        entitlement = await _entitlement_in_unit(session, employee_id, balance.leave_type_id, balance_unit)
        used = await _used_in_year(session, balance, year)
        carryover = max(Decimal(0), Decimal(balance.balance_amount) + used - entitlement)

        base = _build_balance_response(balance, leave_type)
        items.append(
            BalanceBreakdownResponse(
                **base.model_dump(),
                current_year_entitlement=entitlement,
                used_this_year=used,
                carryover_from_previous_years=carryover,
            )
        )

    return BalanceListResponse(items=items, total=len(items))
