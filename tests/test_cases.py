"""Tests for case CRUD endpoints."""

import re

import pytest
from httpx import AsyncClient


async def _create(client: AsyncClient, **overrides):
    body = {"title": "Burglary at Main Street", "description": "Laptops missing", **overrides}
    return await client.post("/api/cases", json=body)


@pytest.mark.asyncio
async def test_create_case(officer_client: AsyncClient, officer):
    resp = await _create(officer_client, priority="high")
    assert resp.status_code == 201
    case = resp.json()["case"]
    assert case["title"] == "Burglary at Main Street"
    assert case["status"] == "open"
    assert case["priority"] == "high"
    assert case["createdById"] == officer.id
    assert re.fullmatch(r"CASE-2025-\d{3}", case["caseNumber"])
    assert case["caseNumber"] == f"CASE-2025-{case['id']:03d}"


@pytest.mark.asyncio
async def test_author_comes_from_session(officer_client: AsyncClient, officer):
    resp = await _create(officer_client, createdById=1, caseNumber="FAKE-1")
    assert resp.status_code == 201
    assert resp.json()["case"]["createdById"] == officer.id
    assert resp.json()["case"]["caseNumber"] != "FAKE-1"


@pytest.mark.asyncio
async def test_case_numbers_unique(admin_client: AsyncClient):
    numbers = set()
    for i in range(5):
        numbers.add((await _create(admin_client, title=f"Case {i}")).json()["case"]["caseNumber"])
    assert len(numbers) == 5


@pytest.mark.asyncio
async def test_create_case_validation(admin_client: AsyncClient):
    assert (await admin_client.post("/api/cases", json={"description": "no title"})).status_code == 400
    assert (await _create(admin_client, title="")).status_code == 400


@pytest.mark.asyncio
async def test_cases_require_login(async_client: AsyncClient):
    assert (await async_client.get("/api/cases")).status_code == 401
    assert (await _create(async_client)).status_code == 401


@pytest.mark.asyncio
async def test_list_cases_is_repository_backed(admin_client: AsyncClient):
    resp = await admin_client.get("/api/cases")
    assert resp.status_code == 200
    assert resp.json() == {"cases": []}
    await _create(admin_client)
    assert len((await admin_client.get("/api/cases")).json()["cases"]) == 1


@pytest.mark.asyncio
async def test_get_case_round_trip(admin_client: AsyncClient):
    created = (await _create(admin_client, assignedOfficerId=1)).json()["case"]
    resp = await admin_client.get(f"/api/cases/{created['id']}")
    assert resp.status_code == 200
    assert resp.json()["case"] == created
    assert (await admin_client.get("/api/cases/999")).status_code == 404


@pytest.mark.asyncio
async def test_update_case(admin_client: AsyncClient, clock):
    created = (await _create(admin_client)).json()["case"]
    clock.advance(minutes=10)
    resp = await admin_client.put(
        f"/api/cases/{created['id']}", json={"status": "in_progress", "assignedOfficerId": 1}
    )
    assert resp.status_code == 200
    case = resp.json()["case"]
    assert case["status"] == "in_progress"
    assert case["assignedOfficerId"] == 1
    assert case["title"] == created["title"]
    assert case["updatedAt"] != created["updatedAt"]
    assert case["createdAt"] == created["createdAt"]


@pytest.mark.asyncio
async def test_update_missing_case_is_404(admin_client: AsyncClient):
    resp = await admin_client.put("/api/cases/999", json={"status": "closed"})
    assert resp.status_code == 404
    assert resp.json()["message"] == "Case not found"


@pytest.mark.asyncio
async def test_update_case_rejects_null_title(admin_client: AsyncClient):
    created = (await _create(admin_client)).json()["case"]
    resp = await admin_client.put(f"/api/cases/{created['id']}", json={"title": None})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_delete_case(admin_client: AsyncClient):
    created = (await _create(admin_client)).json()["case"]
    resp = await admin_client.delete(f"/api/cases/{created['id']}")
    assert resp.status_code == 200
    assert (await admin_client.get(f"/api/cases/{created['id']}")).status_code == 404
    assert (await admin_client.delete(f"/api/cases/{created['id']}")).status_code == 404
