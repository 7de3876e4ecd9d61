"""Customer API client package."""

from .customer_api_client import CustomerApiClient, get_api_url

__all__ = ["CustomerApiClient", "get_api_url"]
