"""Integration tests for the employee directory API (upsert, get, list)."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from httpx import AsyncClient

ADMIN_ID = uuid.uuid4()
EMPLOYEE_ID = uuid.uuid4()
ADMIN_HEADERS = {"X-User-Id": str(ADMIN_ID), "X-Role": "admin"}
EMPLOYEE_HEADERS = {"X-User-Id": str(EMPLOYEE_ID), "X-Role": "employee"}


def _employee_payload(full_name: str = "Ada Lovelace", email: str = "ada@example.com") -> dict[str, str]:
    return {"full_name": full_name, "email": email}


async def test_upsert_employee(async_client: AsyncClient) -> None:
    response = await async_client.put(f"/employees/{EMPLOYEE_ID}", json=_employee_payload(), headers=ADMIN_HEADERS)

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == str(EMPLOYEE_ID)
    assert data["full_name"] == "Ada Lovelace"
    assert data["is_active"] is True


async def test_upsert_replaces_existing(async_client: AsyncClient) -> None:
    await async_client.put(f"/employees/{EMPLOYEE_ID}", json=_employee_payload(), headers=ADMIN_HEADERS)
    await async_client.put(
        f"/employees/{EMPLOYEE_ID}",
        json=_employee_payload(full_name="Ada King"),
        headers=ADMIN_HEADERS,
    )

    response = await async_client.get(f"/employees/{EMPLOYEE_ID}", headers=ADMIN_HEADERS)
    assert response.json()["full_name"] == "Ada King"


async def test_upsert_requires_admin(async_client: AsyncClient) -> None:
    response = await async_client.put(
        f"/employees/{EMPLOYEE_ID}", json=_employee_payload(), headers=EMPLOYEE_HEADERS
    )
    assert response.status_code == 403


async def test_upsert_rejects_blank_name(async_client: AsyncClient) -> None:
    response = await async_client.put(
        f"/employees/{EMPLOYEE_ID}", json=_employee_payload(full_name=""), headers=ADMIN_HEADERS
    )
    assert response.status_code == 422
    assert response.json()["error"] == "RequestValidationError"


async def test_employee_can_read_self(async_client: AsyncClient) -> None:
    await async_client.put(f"/employees/{EMPLOYEE_ID}", json=_employee_payload(), headers=ADMIN_HEADERS)

    response = await async_client.get(f"/employees/{EMPLOYEE_ID}", headers=EMPLOYEE_HEADERS)

    assert response.status_code == 200
    assert response.json()["email"] == "ada@example.com"


async def test_employee_cannot_read_others(async_client: AsyncClient) -> None:
    other_id = uuid.uuid4()
    await async_client.put(f"/employees/{other_id}", json=_employee_payload(), headers=ADMIN_HEADERS)

    response = await async_client.get(f"/employees/{other_id}", headers=EMPLOYEE_HEADERS)

    assert response.status_code == 403


async def test_get_unknown_employee(async_client: AsyncClient) -> None:
    response = await async_client.get(f"/employees/{uuid.uuid4()}", headers=ADMIN_HEADERS)

    assert response.status_code == 404
    assert response.json()["error"] == "NotFoundError"


async def test_list_employees_sorted_by_name(async_client: AsyncClient) -> None:
    await async_client.put(
        f"/employees/{uuid.uuid4()}", json=_employee_payload("Grace Hopper", "grace@example.com"), headers=ADMIN_HEADERS
    )
    await async_client.put(f"/employees/{EMPLOYEE_ID}", json=_employee_payload(), headers=ADMIN_HEADERS)

    response = await async_client.get("/employees", headers=ADMIN_HEADERS)

    data = response.json()
    assert data["total"] == 2
    assert [item["full_name"] for item in data["items"]] == ["Ada Lovelace", "Grace Hopper"]


async def test_missing_user_header_rejected(async_client: AsyncClient) -> None:
    response = await async_client.get("/employees", headers={"X-Role": "admin"})
    assert response.status_code == 422
