# ruff: noqa: TC003
from __future__ import annotations

import uuid

from pydantic import BaseModel, Field


class UpsertEmployeePayload(BaseModel):
    """Request body for registering an employee in the directory stub."""

    full_name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=1, max_length=255)
    is_active: bool = True


class EmployeeResponse(BaseModel):
    """Response schema for an employee."""

    id: uuid.UUID
    full_name: str
    email: str
    is_active: bool


class EmployeeListResponse(BaseModel):
    """List of employees."""

    items: list[EmployeeResponse]
    total: int
