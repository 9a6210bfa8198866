# ruff: noqa: TC003
from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlmodel import col

from leave_ledger.config import get_settings
from leave_ledger.exceptions import NotFoundError
from leave_ledger.models.enums import LeaveUnit
from leave_ledger.models.leave_type import LeaveType
from leave_ledger.schemas.leave_type import LeaveTypeListResponse, LeaveTypeResponse

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leave_ledger.schemas.leave_type import CreateLeaveTypePayload

logger = logging.getLogger(__name__)


def _build_leave_type_response(leave_type: LeaveType) -> LeaveTypeResponse:
    return LeaveTypeResponse(
        id=leave_type.id,
        name=leave_type.name,
        unit=LeaveUnit(leave_type.unit),
        description=leave_type.description,
        is_sick_leave=leave_type.is_sick_leave,
        created_at=leave_type.created_at,
    )


async def get_leave_type_or_404(session: AsyncSession, leave_type_id: uuid.UUID) -> LeaveType:
    """Fetch a leave type by ID. Raises NotFoundError if absent."""
    leave_type = await session.get(LeaveType, leave_type_id)
    if leave_type is None:
        raise NotFoundError(f"Leave type {leave_type_id} not found")
    return leave_type


async def get_or_create_leave_type_for_unit(session: AsyncSession, unit: LeaveUnit) -> LeaveType:
    """Return the leave type measured in ``unit``, creating a default one if none exists.

    Leave types are keyed by unit: there is one daily and one hourly type.
    When several share a unit the oldest wins.
    """
    result = await session.execute(
        select(LeaveType).where(col(LeaveType.unit) == unit.value).order_by(col(LeaveType.created_at)).limit(1)
    )
    leave_type = result.scalar_one_or_none()
    if leave_type is not None:
        return leave_type

    settings = get_settings()
    name = settings.default_daily_leave_type_name if unit == LeaveUnit.DAY else settings.default_hourly_leave_type_name
    leave_type = LeaveType(name=name, unit=unit.value)
    session.add(leave_type)
    await session.flush()
    logger.info("Created default leave type %r for unit %s", name, unit.value)
    return leave_type


async def create_leave_type(session: AsyncSession, payload: CreateLeaveTypePayload) -> LeaveTypeResponse:
    """Create a leave type."""
    leave_type = LeaveType(
        name=payload.name,
        unit=payload.unit.value,
        description=payload.description,
        is_sick_leave=payload.is_sick_leave,
    )
    session.add(leave_type)
    await session.commit()
    await session.refresh(leave_type)
    return _build_leave_type_response(leave_type)


async def get_leave_type(session: AsyncSession, leave_type_id: uuid.UUID) -> LeaveTypeResponse:
    """Get a single leave type."""
    return _build_leave_type_response(await get_leave_type_or_404(session, leave_type_id))


async def list_leave_types(session: AsyncSession) -> LeaveTypeListResponse:
    """List all leave types ordered by name."""
    result = await session.execute(select(LeaveType).order_by(col(LeaveType.name)))
    leave_types = list(result.scalars().all())
    return LeaveTypeListResponse(
        items=[_build_leave_type_response(lt) for lt in leave_types],
        total=len(leave_types),
    )
