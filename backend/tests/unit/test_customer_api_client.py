"""Unit tests for the CustomerApiClient."""

import json

import httpx
import pytest

from app.infrastructure.client import CustomerApiClient, get_api_url


# ── Helpers ──


def _make_mock_transport(
    response_data: dict | list | None = None,
    status_code: int = 200,
    seen: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    """Create a mock transport that records requests and returns a fixed response."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, json=response_data)

    return httpx.MockTransport(handler)


def _client(transport: httpx.MockTransport) -> CustomerApiClient:
    return CustomerApiClient(
        base_url="http://registry.test/",
        http_client=httpx.AsyncClient(transport=transport),
    )


# ── URL building ──


def test_get_api_url_avoids_double_slashes():
    assert get_api_url("/api/customer", "http://host:3000/") == "http://host:3000/api/customer"
    assert get_api_url("api/customer", "http://host:3000") == "http://host:3000/api/customer"


# ── Operations ──


@pytest.mark.asyncio
async def test_create_customer_posts_json_body():
    seen: list[httpx.Request] = []
    envelope = {"success": True, "data": {"_id": "abc", "memberNumber": 42}}
    client = _client(_make_mock_transport(envelope, status_code=201, seen=seen))

    payload = {"name": "Ada", "dateOfBirth": "1990-01-01", "memberNumber": "42", "interests": "math"}
    result = await client.create_customer(payload)

    assert result == envelope
    assert seen[0].method == "POST"
    assert str(seen[0].url) == "http://registry.test/api/customer"
    assert json.loads(seen[0].content) == payload


@pytest.mark.asyncio
async def test_error_envelope_is_returned_as_is():
    envelope = {"success": False, "error": "Member number already exists"}
    client = _client(_make_mock_transport(envelope, status_code=400))

    result = await client.update_customer("abc", {"name": "Ada"})

    assert result == envelope


@pytest.mark.asyncio
async def test_delete_customer_targets_record_url():
    seen: list[httpx.Request] = []
    client = _client(
        _make_mock_transport({"success": True, "message": "Customer deleted successfully"}, seen=seen)
    )

    result = await client.delete_customer("abc")

    assert result["success"] is True
    assert seen[0].method == "DELETE"
    assert seen[0].url.path == "/api/customer/abc"


@pytest.mark.asyncio
async def test_transport_failure_becomes_error_envelope():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(httpx.MockTransport(handler))

    result = await client.get_all_customers()

    assert result == {"success": False, "error": "connection refused"}


@pytest.mark.asyncio
async def test_non_json_response_becomes_error_envelope():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, content=b"<html>Bad Gateway</html>")

    client = _client(httpx.MockTransport(handler))

    result = await client.get_customer_by_id("abc")

    assert result["success"] is False
    assert result["error"]
