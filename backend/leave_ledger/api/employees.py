# ruff: noqa: TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter

from leave_ledger.api.deps import AdminDep, AuthDep, ensure_self_or_admin
from leave_ledger.schemas.employee import EmployeeListResponse, EmployeeResponse, UpsertEmployeePayload
from leave_ledger.services.employee import EmployeeInfo, get_employee_service, require_employee

employees_router = APIRouter(prefix="/employees", tags=["employees"])


def _to_response(employee: EmployeeInfo) -> EmployeeResponse:
    return EmployeeResponse(
        id=employee.id,
        full_name=employee.full_name,
        email=employee.email,
        is_active=employee.is_active,
    )


@employees_router.put("/{employee_id}", response_model=EmployeeResponse)
async def upsert_employee(
    employee_id: uuid.UUID,
    payload: UpsertEmployeePayload,
    auth: AdminDep,
) -> EmployeeResponse:
    """Register or update an employee in the directory stub (admin only)."""
    employee = EmployeeInfo(
        id=employee_id,
        full_name=payload.full_name,
        email=payload.email,
        is_active=payload.is_active,
    )
    get_employee_service().seed(employee)  # ty: ignore[unresolved-attribute]
    return _to_response(employee)


@employees_router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(employee_id: uuid.UUID, auth: AuthDep) -> EmployeeResponse:
    """Get an employee from the directory."""
    ensure_self_or_admin(auth, employee_id)
    return _to_response(await require_employee(employee_id))


@employees_router.get("", response_model=EmployeeListResponse)
async def list_employees(auth: AdminDep) -> EmployeeListResponse:
    """List employees in the directory (admin only)."""
    employees = await get_employee_service().list_employees()
    return EmployeeListResponse(items=[_to_response(e) for e in employees], total=len(employees))
