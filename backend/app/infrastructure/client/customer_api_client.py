"""HTTP client for the customer API — the Python counterpart of the UI's fetch layer.

Every call returns the decoded response envelope. Transport failures and
undecodable responses are folded into ``{"success": False, "error": ...}``
so callers only ever branch on ``success``.
"""

import logging
from typing import Any

import httpx

from app.config import get_settings

logger = logging.getLogger(__name__)

CUSTOMER_ENDPOINT = "api/customer"


def get_api_base_url() -> str:
    return get_settings().api_base_url


def get_api_url(endpoint: str, base_url: str | None = None) -> str:
    """Join the base URL and an endpoint without doubling the slash."""
    base = (base_url if base_url is not None else get_api_base_url()).rstrip("/")
    clean_endpoint = endpoint[1:] if endpoint.startswith("/") else endpoint
    return f"{base}/{clean_endpoint}"


class CustomerApiClient:
    """Async client for ``/api/customer``.

    Usage:
        async with CustomerApiClient() as api:
            result = await api.create_customer({...})
            if not result["success"]:
                print(result["error"])
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        settings = get_settings()
        self._base_url = (base_url or settings.api_base_url).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.api_timeout
        self._http_client = http_client
        self._owns_client = http_client is None

    async def __aenter__(self) -> "CustomerApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    def _client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self._timeout)
        return self._http_client

    def _url(self, customer_id: str | None = None) -> str:
        url = get_api_url(CUSTOMER_ENDPOINT, self._base_url)
        return f"{url}/{customer_id}" if customer_id is not None else url

    async def _request(
        self, method: str, url: str, payload: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        try:
            response = await self._client().request(method, url, json=payload)
            result = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Customer API %s %s failed: %s", method, url, exc)
            return {"success": False, "error": str(exc) or type(exc).__name__}
        if not isinstance(result, dict):
            return {"success": False, "error": "Unexpected response from customer API"}
        return result

    # ── Operations ───────────────────────────────────────────────────

    async def get_all_customers(self) -> dict[str, Any]:
        return await self._request("GET", self._url())

    async def get_customer_by_id(self, customer_id: str) -> dict[str, Any]:
        return await self._request("GET", self._url(customer_id))

    async def create_customer(self, customer_data: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", self._url(), customer_data)

    async def update_customer(
        self, customer_id: str, customer_data: dict[str, Any]
    ) -> dict[str, Any]:
        return await self._request("PUT", self._url(customer_id), customer_data)

    async def delete_customer(self, customer_id: str) -> dict[str, Any]:
        return await self._request("DELETE", self._url(customer_id))

    async def delete_all_customers(self) -> dict[str, Any]:
        """Remove every customer (test / reset use)."""
        return await self._request("DELETE", self._url())
