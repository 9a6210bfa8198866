"""Integration tests for the leave request and balance HTTP endpoints."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

import pytest

from leave_ledger.services.employee import EmployeeInfo

if TYPE_CHECKING:
    from httpx import AsyncClient

    from leave_ledger.services.employee import InMemoryEmployeeService

ADMIN_ID = uuid.uuid4()
EMPLOYEE_ID = uuid.uuid4()
OTHER_EMPLOYEE_ID = uuid.uuid4()
ADMIN_HEADERS = {"X-User-Id": str(ADMIN_ID), "X-Role": "admin"}
EMPLOYEE_HEADERS = {"X-User-Id": str(EMPLOYEE_ID), "X-Role": "employee"}
OTHER_HEADERS = {"X-User-Id": str(OTHER_EMPLOYEE_ID), "X-Role": "employee"}
REQUESTS_URL = "/requests"


@pytest.fixture(autouse=True)
def _seed_employees(employee_directory: InMemoryEmployeeService) -> None:
    employee_directory.seed(EmployeeInfo(id=EMPLOYEE_ID, full_name="Ada Lovelace", email="ada@example.com"))
    employee_directory.seed(EmployeeInfo(id=OTHER_EMPLOYEE_ID, full_name="Alan Turing", email="alan@example.com"))


# ---------------------------------------------------------------------------
# Test helpers
# ---------------------------------------------------------------------------


def _request_body(
    start_at: str = "2025-03-10T09:00:00Z",
    end_at: str = "2025-03-12T17:00:00Z",
    unit: str = "DAY",
    employee_id: uuid.UUID = EMPLOYEE_ID,
) -> dict[str, str]:
    return {"employee_id": str(employee_id), "unit": unit, "start_at": start_at, "end_at": end_at}


async def _daily_type_with_policy(client: AsyncClient, amount: str) -> str:
    response = await client.post("/leave-types", json={"name": "Daily Leave", "unit": "DAY"}, headers=ADMIN_HEADERS)
    leave_type_id = response.json()["id"]
    await client.put(
        f"/leave-types/{leave_type_id}/policy",
        json={"entitlement_amount": amount, "entitlement_unit": "DAY"},
        headers=ADMIN_HEADERS,
    )
    return leave_type_id


async def _balance(client: AsyncClient, leave_type_id: str) -> float:
    response = await client.get(f"/employees/{EMPLOYEE_ID}/balances/{leave_type_id}", headers=EMPLOYEE_HEADERS)
    assert response.status_code == 200
    return float(response.json()["balance_amount"])


# ---------------------------------------------------------------------------
# Submission
# ---------------------------------------------------------------------------


async def test_submit_request(async_client: AsyncClient) -> None:
    leave_type_id = await _daily_type_with_policy(async_client, "5")

    response = await async_client.post(REQUESTS_URL, json=_request_body(), headers=EMPLOYEE_HEADERS)

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "PENDING"
    assert float(data["duration_amount"]) == 3
    assert data["leave_type_id"] == leave_type_id
    assert await _balance(async_client, leave_type_id) == 5


async def test_submit_for_someone_else_forbidden(async_client: AsyncClient) -> None:
    response = await async_client.post(
        REQUESTS_URL, json=_request_body(employee_id=OTHER_EMPLOYEE_ID), headers=EMPLOYEE_HEADERS
    )
    assert response.status_code == 403


async def test_admin_may_submit_for_employee(async_client: AsyncClient) -> None:
    response = await async_client.post(REQUESTS_URL, json=_request_body(), headers=ADMIN_HEADERS)
    assert response.status_code == 201


async def test_end_before_start_is_400(async_client: AsyncClient) -> None:
    response = await async_client.post(
        REQUESTS_URL,
        json=_request_body("2025-03-10T00:00:00Z", "2025-03-09T00:00:00Z"),
        headers=EMPLOYEE_HEADERS,
    )

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "ValidationError"
    assert data["detail"] == "Start date must be before end date"
    assert data["status_code"] == 400


async def test_insufficient_balance_is_400(async_client: AsyncClient) -> None:
    await _daily_type_with_policy(async_client, "2")

    response = await async_client.post(REQUESTS_URL, json=_request_body(), headers=EMPLOYEE_HEADERS)

    assert response.status_code == 400
    assert response.json()["error"] == "InsufficientBalanceError"


async def test_overlap_is_409(async_client: AsyncClient) -> None:
    await _daily_type_with_policy(async_client, "10")
    created = await async_client.post(REQUESTS_URL, json=_request_body(), headers=EMPLOYEE_HEADERS)
    await async_client.post(f"{REQUESTS_URL}/{created.json()['id']}/approve", headers=ADMIN_HEADERS)

    response = await async_client.post(
        REQUESTS_URL,
        json=_request_body("2025-03-12T09:00:00Z", "2025-03-13T17:00:00Z"),
        headers=EMPLOYEE_HEADERS,
    )

    assert response.status_code == 409
    assert response.json()["error"] == "OverlapError"


async def test_unknown_employee_is_404(async_client: AsyncClient) -> None:
    response = await async_client.post(
        REQUESTS_URL, json=_request_body(employee_id=uuid.uuid4()), headers=ADMIN_HEADERS
    )
    assert response.status_code == 404


async def test_malformed_body_is_422(async_client: AsyncClient) -> None:
    response = await async_client.post(
        REQUESTS_URL, json={"employee_id": str(EMPLOYEE_ID), "unit": "DAY"}, headers=EMPLOYEE_HEADERS
    )
    assert response.status_code == 422
    assert response.json()["error"] == "RequestValidationError"


# ---------------------------------------------------------------------------
# Review
# ---------------------------------------------------------------------------


async def test_approve_debits_balance(async_client: AsyncClient) -> None:
    leave_type_id = await _daily_type_with_policy(async_client, "5")
    created = await async_client.post(REQUESTS_URL, json=_request_body(), headers=EMPLOYEE_HEADERS)

    response = await async_client.post(
        f"{REQUESTS_URL}/{created.json()['id']}/approve",
        json={"admin_comment": "Enjoy"},
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "APPROVED"
    assert data["admin_comment"] == "Enjoy"
    assert data["reviewed_by"] == str(ADMIN_ID)
    assert await _balance(async_client, leave_type_id) == 2


async def test_review_endpoint_rejects(async_client: AsyncClient) -> None:
    leave_type_id = await _daily_type_with_policy(async_client, "5")
    created = await async_client.post(REQUESTS_URL, json=_request_body(), headers=EMPLOYEE_HEADERS)

    response = await async_client.post(
        f"{REQUESTS_URL}/{created.json()['id']}/review",
        json={"decision": "REJECT", "admin_comment": "Busy week"},
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 200
    assert response.json()["status"] == "REJECTED"
    assert await _balance(async_client, leave_type_id) == 5


async def test_review_requires_admin(async_client: AsyncClient) -> None:
    await _daily_type_with_policy(async_client, "5")
    created = await async_client.post(REQUESTS_URL, json=_request_body(), headers=EMPLOYEE_HEADERS)

    response = await async_client.post(f"{REQUESTS_URL}/{created.json()['id']}/approve", headers=EMPLOYEE_HEADERS)

    assert response.status_code == 403


async def test_second_review_is_400(async_client: AsyncClient) -> None:
    await _daily_type_with_policy(async_client, "5")
    created = await async_client.post(REQUESTS_URL, json=_request_body(), headers=EMPLOYEE_HEADERS)
    request_id = created.json()["id"]
    await async_client.post(f"{REQUESTS_URL}/{request_id}/approve", headers=ADMIN_HEADERS)

    response = await async_client.post(f"{REQUESTS_URL}/{request_id}/reject", headers=ADMIN_HEADERS)

    assert response.status_code == 400
    assert response.json()["error"] == "InvalidTransitionError"


async def test_review_unknown_request_is_404(async_client: AsyncClient) -> None:
    response = await async_client.post(f"{REQUESTS_URL}/{uuid.uuid4()}/approve", headers=ADMIN_HEADERS)
    assert response.status_code == 404


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


async def test_employee_sees_only_own_requests(async_client: AsyncClient) -> None:
    await async_client.post(REQUESTS_URL, json=_request_body(), headers=EMPLOYEE_HEADERS)
    await async_client.post(REQUESTS_URL, json=_request_body(employee_id=OTHER_EMPLOYEE_ID), headers=OTHER_HEADERS)

    mine = await async_client.get(REQUESTS_URL, headers=EMPLOYEE_HEADERS)
    everyone = await async_client.get(REQUESTS_URL, headers=ADMIN_HEADERS)

    assert mine.json()["total"] == 1
    assert everyone.json()["total"] == 2


async def test_list_filtered_by_status(async_client: AsyncClient) -> None:
    created = await async_client.post(REQUESTS_URL, json=_request_body(), headers=EMPLOYEE_HEADERS)
    await async_client.post(
        REQUESTS_URL, json=_request_body("2025-03-17T09:00:00Z", "2025-03-17T17:00:00Z"), headers=EMPLOYEE_HEADERS
    )
    await async_client.post(f"{REQUESTS_URL}/{created.json()['id']}/approve", headers=ADMIN_HEADERS)

    response = await async_client.get(REQUESTS_URL, params={"status": "APPROVED"}, headers=ADMIN_HEADERS)

    data = response.json()
    assert data["total"] == 1
    assert data["items"][0]["id"] == created.json()["id"]


async def test_other_employee_cannot_read_request(async_client: AsyncClient) -> None:
    created = await async_client.post(REQUESTS_URL, json=_request_body(), headers=EMPLOYEE_HEADERS)

    own = await async_client.get(f"{REQUESTS_URL}/{created.json()['id']}", headers=EMPLOYEE_HEADERS)
    foreign = await async_client.get(f"{REQUESTS_URL}/{created.json()['id']}", headers=OTHER_HEADERS)

    assert own.status_code == 200
    assert foreign.status_code == 403


async def test_balance_list_after_approval(async_client: AsyncClient) -> None:
    leave_type_id = await _daily_type_with_policy(async_client, "5")
    created = await async_client.post(REQUESTS_URL, json=_request_body(), headers=EMPLOYEE_HEADERS)
    await async_client.post(f"{REQUESTS_URL}/{created.json()['id']}/approve", headers=ADMIN_HEADERS)

    response = await async_client.get(f"/employees/{EMPLOYEE_ID}/balances", headers=EMPLOYEE_HEADERS)

    data = response.json()
    assert data["total"] == 1
    item = data["items"][0]
    assert item["leave_type_id"] == leave_type_id
    assert float(item["balance_amount"]) == 2
    assert float(item["current_year_entitlement"]) == 5


async def test_balance_of_other_employee_forbidden(async_client: AsyncClient) -> None:
    response = await async_client.get(f"/employees/{OTHER_EMPLOYEE_ID}/balances", headers=EMPLOYEE_HEADERS)
    assert response.status_code == 403
