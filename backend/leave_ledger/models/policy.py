# ruff: noqa: TC003
from __future__ import annotations

import uuid
from decimal import Decimal

import sqlalchemy as sa
from sqlmodel import Field

from leave_ledger.models.base import TimestampMixin, UUIDBase


class LeavePolicy(UUIDBase, TimestampMixin, table=True):
    """Default entitlement for a leave type. At most one per leave type."""

    __tablename__ = "leave_policy"

    leave_type_id: uuid.UUID = Field(
        sa_column=sa.Column(
            sa.Uuid, sa.ForeignKey("leave_type.id", ondelete="CASCADE"), nullable=False, unique=True
        ),
    )
    entitlement_amount: Decimal = Field(max_digits=12, decimal_places=4)
    entitlement_unit: str = Field(max_length=10)
    renewal_period: str = Field(max_length=20)


class EmployeeLeaveSetting(UUIDBase, TimestampMixin, table=True):
    """Per-employee entitlement override that replaces the policy value."""

    __tablename__ = "employee_leave_setting"
    __table_args__ = (
        sa.UniqueConstraint("employee_id", "leave_type_id", name="uq_leave_setting_employee_type"),
    )

    employee_id: uuid.UUID = Field(index=True)
    leave_type_id: uuid.UUID = Field(
        sa_column=sa.Column(sa.Uuid, sa.ForeignKey("leave_type.id", ondelete="CASCADE"), nullable=False),
    )
    custom_entitlement_amount: Decimal = Field(max_digits=12, decimal_places=4)
    custom_entitlement_unit: str = Field(max_length=10)
