"""Integration tests for the /api/customer endpoints against a SQLite store."""

from collections.abc import AsyncIterator
from datetime import datetime

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.infrastructure.database import Base
from app.main import create_app

ADA = {
    "name": "Ada",
    "dateOfBirth": "1990-01-01",
    "memberNumber": 42,
    "interests": "math",
}


# ── Fixtures ──


def _build_app(tmp_path) -> FastAPI:
    return create_app(
        Settings(database_url=f"sqlite:///{tmp_path / 'customers.db'}", _env_file=None)
    )


@pytest_asyncio.fixture
async def client(tmp_path) -> AsyncIterator[AsyncClient]:
    app = _build_app(tmp_path)
    async with app.state.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
    await app.state.engine.dispose()


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


async def _create(client: AsyncClient, **overrides) -> dict:
    response = await client.post("/api/customer", json={**ADA, **overrides})
    assert response.status_code == 201, response.text
    return response.json()["data"]


# ── Create / list ──


@pytest.mark.asyncio
async def test_create_returns_envelope_with_wire_names(client: AsyncClient):
    response = await client.post("/api/customer", json={**ADA, "memberNumber": "42"})

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert "error" not in body
    data = body["data"]
    assert data["_id"]
    assert data["name"] == "Ada"
    assert data["dateOfBirth"] == "1990-01-01"
    assert data["memberNumber"] == 42
    assert data["interests"] == "math"
    assert data["createdAt"] == data["updatedAt"]


@pytest.mark.asyncio
async def test_list_returns_newest_first(client: AsyncClient):
    first = await _create(client, memberNumber=1)
    second = await _create(client, memberNumber=2)
    third = await _create(client, memberNumber=3)

    response = await client.get("/api/customer")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert [c["_id"] for c in body["data"]] == [third["_id"], second["_id"], first["_id"]]


@pytest.mark.asyncio
async def test_list_empty_store(client: AsyncClient):
    response = await client.get("/api/customer")
    assert response.json() == {"success": True, "data": []}


@pytest.mark.asyncio
async def test_create_missing_field_returns_400(client: AsyncClient):
    payload = {k: v for k, v in ADA.items() if k != "interests"}

    response = await client.post("/api/customer", json=payload)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "All fields are required"}
    assert (await client.get("/api/customer")).json()["data"] == []


@pytest.mark.asyncio
async def test_create_duplicate_member_number_returns_400(client: AsyncClient):
    await _create(client)

    response = await client.post("/api/customer", json={**ADA, "name": "Grace"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Member number already exists"}
    assert len((await client.get("/api/customer")).json()["data"]) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("member_number", [2**63, 10**30])
async def test_create_member_number_too_large_returns_400(client: AsyncClient, member_number):
    response = await client.post("/api/customer", json={**ADA, "memberNumber": member_number})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Member number is out of range"}
    assert (await client.get("/api/customer")).json()["data"] == []


@pytest.mark.asyncio
async def test_create_accepts_member_number_beyond_32_bits(client: AsyncClient):
    created = await _create(client, memberNumber=3_000_000_000)

    fetched = await client.get(f"/api/customer/{created['_id']}")

    assert fetched.json()["data"]["memberNumber"] == 3_000_000_000


@pytest.mark.asyncio
async def test_create_without_body_returns_400(client: AsyncClient):
    response = await client.post("/api/customer")

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "All fields are required"}


@pytest.mark.asyncio
async def test_non_object_body_returns_400(client: AsyncClient):
    response = await client.post("/api/customer", json=["not", "an", "object"])

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"].startswith("Invalid request body")


# ── Get ──


@pytest.mark.asyncio
async def test_get_by_id(client: AsyncClient):
    created = await _create(client)

    response = await client.get(f"/api/customer/{created['_id']}")

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": created}


@pytest.mark.asyncio
@pytest.mark.parametrize("customer_id", ["0b6c4f7e-8f0e-4a4c-9d7e-6f6e2b1a9c11", "not-a-uuid"])
async def test_get_unknown_or_malformed_id_returns_404(client: AsyncClient, customer_id: str):
    response = await client.get(f"/api/customer/{customer_id}")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Customer not found"}


# ── Update ──


@pytest.mark.asyncio
async def test_round_trip_update_changes_only_interests(client: AsyncClient):
    created = await _create(client)

    response = await client.put(
        f"/api/customer/{created['_id']}", json={**ADA, "interests": "physics"}
    )

    assert response.status_code == 200
    updated = response.json()["data"]
    assert updated["_id"] == created["_id"]
    assert updated["interests"] == "physics"
    assert updated["memberNumber"] == 42
    assert updated["createdAt"] == created["createdAt"]
    assert _ts(updated["updatedAt"]) > _ts(updated["createdAt"])

    fetched = (await client.get(f"/api/customer/{created['_id']}")).json()["data"]
    assert fetched == updated


@pytest.mark.asyncio
async def test_update_to_taken_member_number_returns_400(client: AsyncClient):
    await _create(client, memberNumber=1)
    second = await _create(client, name="Grace", memberNumber=2)

    response = await client.put(
        f"/api/customer/{second['_id']}", json={**ADA, "name": "Grace", "memberNumber": 1}
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Member number already exists"
    fetched = (await client.get(f"/api/customer/{second['_id']}")).json()["data"]
    assert fetched["memberNumber"] == 2


@pytest.mark.asyncio
async def test_update_unknown_customer_returns_404(client: AsyncClient):
    response = await client.put(
        "/api/customer/0b6c4f7e-8f0e-4a4c-9d7e-6f6e2b1a9c11", json=ADA
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_missing_field_returns_400(client: AsyncClient):
    created = await _create(client)

    response = await client.put(f"/api/customer/{created['_id']}", json={**ADA, "name": ""})

    assert response.status_code == 400
    assert response.json()["error"] == "All fields are required"


# ── Delete ──


@pytest.mark.asyncio
async def test_delete_by_id(client: AsyncClient):
    created = await _create(client)

    response = await client.delete(f"/api/customer/{created['_id']}")

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Customer deleted successfully"}
    assert (await client.get("/api/customer")).json()["data"] == []

    again = await client.delete(f"/api/customer/{created['_id']}")
    assert again.status_code == 404


@pytest.mark.asyncio
async def test_delete_all(client: AsyncClient):
    await _create(client, memberNumber=1)
    await _create(client, memberNumber=2)

    response = await client.delete("/api/customer")

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "All customers deleted"}
    assert (await client.get("/api/customer")).json()["data"] == []

    empty_again = await client.delete("/api/customer")
    assert empty_again.status_code == 200


# ── Store failures ──


@pytest.mark.asyncio
async def test_store_error_returns_500_with_message(tmp_path):
    app = _build_app(tmp_path)  # tables never created

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        response = await http.get("/api/customer")
    await app.state.engine.dispose()

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert "no such table" in body["error"]
