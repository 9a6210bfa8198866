# ruff: noqa: TC003
from __future__ import annotations

import logging
import uuid
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlmodel import col

from leave_ledger.exceptions import NotFoundError
from leave_ledger.models.base import now_utc
from leave_ledger.models.enums import LeaveUnit, RenewalPeriod
from leave_ledger.models.leave_type import LeaveType
from leave_ledger.models.policy import EmployeeLeaveSetting, LeavePolicy
from leave_ledger.schemas.policy import (
    EmployeeLeaveSettingListResponse,
    EmployeeLeaveSettingResponse,
    LeavePolicyListResponse,
    LeavePolicyResponse,
)
from leave_ledger.services.employee import require_employee
from leave_ledger.services.leave_type import get_leave_type_or_404

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leave_ledger.schemas.policy import EmployeeLeaveSettingPayload, LeavePolicyPayload

logger = logging.getLogger(__name__)


def _build_policy_response(policy: LeavePolicy, leave_type: LeaveType) -> LeavePolicyResponse:
    return LeavePolicyResponse(
        id=policy.id,
        leave_type_id=policy.leave_type_id,
        leave_type_name=leave_type.name,
        is_sick_leave=leave_type.is_sick_leave,
        entitlement_amount=Decimal(policy.entitlement_amount),
        entitlement_unit=LeaveUnit(policy.entitlement_unit),
        renewal_period=RenewalPeriod(policy.renewal_period),
        created_at=policy.created_at,
        updated_at=policy.updated_at,
    )


def _build_setting_response(setting: EmployeeLeaveSetting) -> EmployeeLeaveSettingResponse:
    return EmployeeLeaveSettingResponse(
        id=setting.id,
        employee_id=setting.employee_id,
        leave_type_id=setting.leave_type_id,
        custom_entitlement_amount=Decimal(setting.custom_entitlement_amount),
        custom_entitlement_unit=LeaveUnit(setting.custom_entitlement_unit),
        updated_at=setting.updated_at,
    )


# ---------------------------------------------------------------------------
# Leave policies
# ---------------------------------------------------------------------------


async def upsert_leave_policy(
    session: AsyncSession,
    leave_type_id: uuid.UUID,
    payload: LeavePolicyPayload,
) -> LeavePolicyResponse:
    """Create the policy of a leave type, or update it if one already exists.

    Existing balance rows are not recalculated; the new entitlement applies
    to balances created from now on.
    """
    leave_type = await get_leave_type_or_404(session, leave_type_id)

    result = await session.execute(select(LeavePolicy).where(col(LeavePolicy.leave_type_id) == leave_type_id))
    policy = result.scalar_one_or_none()

    if policy is None:
        policy = LeavePolicy(
            leave_type_id=leave_type_id,
            entitlement_amount=payload.entitlement_amount,
            entitlement_unit=payload.entitlement_unit.value,
            renewal_period=payload.renewal_period.value,
        )
        session.add(policy)
        logger.info("Created leave policy for leave type %s", leave_type_id)
    else:
        policy.entitlement_amount = payload.entitlement_amount
        policy.entitlement_unit = payload.entitlement_unit.value
        policy.renewal_period = payload.renewal_period.value
        policy.updated_at = now_utc()
        logger.info("Updated leave policy %s for leave type %s", policy.id, leave_type_id)

    await session.commit()
    await session.refresh(policy)
    return _build_policy_response(policy, leave_type)


async def update_leave_policy(
    session: AsyncSession,
    policy_id: uuid.UUID,
    payload: LeavePolicyPayload,
) -> LeavePolicyResponse:
    """Update an existing policy by ID."""
    policy = await session.get(LeavePolicy, policy_id)
    if policy is None:
        raise NotFoundError(f"Leave policy {policy_id} not found")
    return await upsert_leave_policy(session, policy.leave_type_id, payload)


async def list_leave_policies(session: AsyncSession) -> LeavePolicyListResponse:
    """List every policy with its leave type."""
    result = await session.execute(
        select(LeavePolicy, LeaveType)
        .join(LeaveType, col(LeaveType.id) == col(LeavePolicy.leave_type_id))
        .order_by(col(LeaveType.name))
    )
    items = [_build_policy_response(policy, leave_type) for policy, leave_type in result.all()]
    return LeavePolicyListResponse(items=items, total=len(items))


# ---------------------------------------------------------------------------
# Employee overrides
# ---------------------------------------------------------------------------


async def upsert_employee_leave_setting(
    session: AsyncSession,
    employee_id: uuid.UUID,
    payload: EmployeeLeaveSettingPayload,
) -> EmployeeLeaveSettingResponse:
    """Set the custom entitlement of one employee for one leave type."""
    await require_employee(employee_id)
    await get_leave_type_or_404(session, payload.leave_type_id)

    result = await session.execute(
        select(EmployeeLeaveSetting).where(
            col(EmployeeLeaveSetting.employee_id) == employee_id,
            col(EmployeeLeaveSetting.leave_type_id) == payload.leave_type_id,
        )
    )
    setting = result.scalar_one_or_none()

    if setting is None:
        setting = EmployeeLeaveSetting(
            employee_id=employee_id,
            leave_type_id=payload.leave_type_id,
            custom_entitlement_amount=payload.custom_entitlement_amount,
            custom_entitlement_unit=payload.custom_entitlement_unit.value,
        )
        session.add(setting)
    else:
        setting.custom_entitlement_amount = payload.custom_entitlement_amount
        setting.custom_entitlement_unit = payload.custom_entitlement_unit.value
        setting.updated_at = now_utc()

    await session.commit()
    await session.refresh(setting)
    logger.info("Set custom entitlement for employee=%s leave_type=%s", employee_id, payload.leave_type_id)
    return _build_setting_response(setting)


async def list_employee_leave_settings(
    session: AsyncSession,
    employee_id: uuid.UUID,
) -> EmployeeLeaveSettingListResponse:
    """List the entitlement overrides of an employee."""
    result = await session.execute(
        select(EmployeeLeaveSetting)
        .where(col(EmployeeLeaveSetting.employee_id) == employee_id)
        .order_by(col(EmployeeLeaveSetting.created_at))
    )
    settings = list(result.scalars().all())
    return EmployeeLeaveSettingListResponse(
        items=[_build_setting_response(s) for s in settings],
        total=len(settings),
    )
