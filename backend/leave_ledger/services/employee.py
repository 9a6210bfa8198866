# ruff: noqa: TC003
from __future__ import annotations

import uuid
from typing import Protocol, runtime_checkable

from pydantic import BaseModel

from leave_ledger.exceptions import NotFoundError, ValidationError


class EmployeeInfo(BaseModel):
    """Employee record owned by the external employee directory."""

    id: uuid.UUID
    full_name: str
    email: str
    is_active: bool = True


@runtime_checkable
class EmployeeService(Protocol):
    """Interface for the employee directory."""

    async def get_employee(self, employee_id: uuid.UUID) -> EmployeeInfo | None:
        """Fetch an employee. Returns None if not found."""
        ...

    async def list_employees(self) -> list[EmployeeInfo]:
        """List all known employees."""
        ...


class InMemoryEmployeeService:
    """In-memory directory used for development and tests."""

    def __init__(self) -> None:
        self._employees: dict[uuid.UUID, EmployeeInfo] = {}

    def seed(self, employee: EmployeeInfo) -> None:
        """Register or replace an employee."""
        self._employees[employee.id] = employee

    async def get_employee(self, employee_id: uuid.UUID) -> EmployeeInfo | None:
        return self._employees.get(employee_id)

    async def list_employees(self) -> list[EmployeeInfo]:
        return sorted(self._employees.values(), key=lambda e: e.full_name)


_employee_service: EmployeeService = InMemoryEmployeeService()


def get_employee_service() -> EmployeeService:
    """Return the active employee directory."""
    return _employee_service


def set_employee_service(service: EmployeeService) -> None:
    """Override the directory (for testing or production wiring)."""
    global _employee_service
    _employee_service = service


async def require_employee(employee_id: uuid.UUID) -> EmployeeInfo:
    """Return the employee or raise NotFoundError."""
    employee = await get_employee_service().get_employee(employee_id)
    if employee is None:
        raise NotFoundError(f"Employee {employee_id} not found")
    return employee


async def require_active_employee(employee_id: uuid.UUID) -> EmployeeInfo:
    """Return the employee if they may submit leave. Raises ValidationError when inactive."""
    employee = await require_employee(employee_id)
    if not employee.is_active:
        raise ValidationError(f"Employee {employee_id} is inactive")
    return employee
