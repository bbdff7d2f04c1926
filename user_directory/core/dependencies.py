# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Dependency injection: HTTP client, relay service and directory factories."""
import httpx

from user_directory.core.config import settings
from user_directory.services.collection_client import UserCollectionClient
from user_directory.services.directory_controller import DirectoryController
from user_directory.services.relay_service import RelayService

_http_client: httpx.AsyncClient | None = None
_relay_service: RelayService | None = None


def init_http_client(transport: httpx.AsyncBaseTransport | None = None):
    global _http_client, _relay_service
    _http_client = httpx.AsyncClient(timeout=settings.REMOTE_TIMEOUT, transport=transport)
    _relay_service = RelayService(_http_client)


async def close_http_client():
    global _http_client, _relay_service
    if _http_client:
        await _http_client.aclose()
    _http_client = None
    _relay_service = None


def get_http_client() -> httpx.AsyncClient:
    assert _http_client is not None
    return _http_client


def get_relay_service() -> RelayService:
    assert _relay_service is not None
    return _relay_service


def build_directory(http_client: httpx.AsyncClient,
                    base_url: str | None = None) -> DirectoryController:
    """Listing controller bound to the configured collection."""
    return DirectoryController(UserCollectionClient(http_client, base_url))
