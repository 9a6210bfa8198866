"""Entitlement resolution: employee override, then leave policy, then nothing.

Each source is a lookup returning an ``Entitlement`` or ``None``; the first
source that answers wins. Amounts are returned in the unit they were
configured in. Reconciling that unit with a balance row is the caller's job.
"""

# ruff: noqa: TC003
from __future__ import annotations

import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlmodel import col

from leave_ledger.exceptions import PolicyMissingError
from leave_ledger.models.enums import LeaveUnit
from leave_ledger.models.policy import EmployeeLeaveSetting, LeavePolicy

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from sqlalchemy.ext.asyncio import AsyncSession


@dataclass(frozen=True)
class Entitlement:
    """An entitlement amount and the unit it is expressed in."""

    amount: Decimal
    unit: LeaveUnit
    source: str


async def _from_employee_setting(
    session: AsyncSession,
    employee_id: uuid.UUID,
    leave_type_id: uuid.UUID,
) -> Entitlement | None:
    result = await session.execute(
        select(EmployeeLeaveSetting).where(
            col(EmployeeLeaveSetting.employee_id) == employee_id,
            col(EmployeeLeaveSetting.leave_type_id) == leave_type_id,
        )
    )
    setting = result.scalars().first()
    if setting is None:
        return None
    return Entitlement(
        amount=Decimal(setting.custom_entitlement_amount),
        unit=LeaveUnit(setting.custom_entitlement_unit),
        source="employee_setting",
    )


async def _from_leave_policy(
    session: AsyncSession,
    employee_id: uuid.UUID,
    leave_type_id: uuid.UUID,
) -> Entitlement | None:
    result = await session.execute(select(LeavePolicy).where(col(LeavePolicy.leave_type_id) == leave_type_id))
    policy = result.scalars().first()
    if policy is None:
        return None
    return Entitlement(
        amount=Decimal(policy.entitlement_amount),
        unit=LeaveUnit(policy.entitlement_unit),
        source="leave_policy",
    )


# Highest priority first.
ENTITLEMENT_SOURCES: tuple[Callable[[AsyncSession, uuid.UUID, uuid.UUID], Awaitable[Entitlement | None]], ...] = (
    _from_employee_setting,
    _from_leave_policy,
)


async def lookup_entitlement(
    session: AsyncSession,
    employee_id: uuid.UUID,
    leave_type_id: uuid.UUID,
) -> Entitlement:
    """Return the first entitlement found in priority order.

    Raises PolicyMissingError when no source defines one.
    """
    for source in ENTITLEMENT_SOURCES:
        entitlement = await source(session, employee_id, leave_type_id)
        if entitlement is not None:
            return entitlement
    raise PolicyMissingError(f"No leave policy found for leave type {leave_type_id}")


async def resolve_entitlement(
    session: AsyncSession,
    employee_id: uuid.UUID,
    leave_type_id: uuid.UUID,
) -> Decimal:
    """Return the entitlement amount for an employee and leave type, without unit conversion."""
    entitlement = await lookup_entitlement(session, employee_id, leave_type_id)
    return entitlement.amount
