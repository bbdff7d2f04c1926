# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""HTTP client for the hosted user collection (list/get/create/update/delete)."""
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from user_directory.core.config import settings
from user_directory.core.errors import NetworkFailure, NotFound
from user_directory.core.logging import get_logger
from user_directory.metrics import REMOTE_CALLS
from user_directory.models.domain import UserRecord
from user_directory.schemas import UserCreate, UserUpdate

logger = get_logger(__name__)


class UserCollectionClient:
    """Async CRUD client; every failure surfaces as a NetworkFailure."""

    def __init__(self, http_client: httpx.AsyncClient, base_url: Optional[str] = None):
        self._client = http_client
        self._base_url = (base_url or settings.DIRECTORY_API_URL).rstrip("/")

    async def list(self) -> List[UserRecord]:
        data = await self._send("list", "GET", "")
        if not isinstance(data, list):
            return []
        return [self._parse("list", item) for item in data]

    async def get(self, user_id: str) -> UserRecord:
        data = await self._send("get", "GET", f"/{user_id}", user_id=user_id)
        return self._parse("get", data)

    async def create(self, fields: UserCreate) -> UserRecord:
        data = await self._send("create", "POST", "", json=fields.model_dump())
        return self._parse("create", data)

    async def update(self, user_id: str, fields: UserUpdate) -> UserRecord:
        data = await self._send(
            "update", "PUT", f"/{user_id}",
            json=fields.model_dump(exclude_none=True), user_id=user_id,
        )
        return self._parse("update", data)

    async def delete(self, user_id: str) -> None:
        await self._send("delete", "DELETE", f"/{user_id}", user_id=user_id, expect_body=False)

    # ── internals ──

    async def _send(self, operation: str, method: str, path: str,
                    json: Optional[dict] = None, user_id: Optional[str] = None,
                    expect_body: bool = True) -> Any:
        url = f"{self._base_url}{path}"
        try:
            resp = await self._client.request(method, url, json=json)
        except httpx.RequestError as exc:
            REMOTE_CALLS.labels(operation=operation, outcome="unreachable").inc()
            raise NetworkFailure(f"{method} {url} failed: {exc}") from exc

        if resp.status_code == 404 and user_id is not None:
            REMOTE_CALLS.labels(operation=operation, outcome="not_found").inc()
            raise NotFound(user_id)
        if not resp.is_success:
            REMOTE_CALLS.labels(operation=operation, outcome="error").inc()
            raise NetworkFailure(
                f"{method} {url} returned HTTP {resp.status_code}",
                status_code=resp.status_code,
            )

        REMOTE_CALLS.labels(operation=operation, outcome="ok").inc()
        if not expect_body:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise NetworkFailure(f"{method} {url} returned a non-JSON body",
                                 status_code=resp.status_code) from exc

    @staticmethod
    def _parse(operation: str, data: Any) -> UserRecord:
        try:
            return UserRecord.model_validate(data)
        except ValidationError as exc:
            logger.warning("Malformed user payload on %s: %s", operation, exc)
            raise NetworkFailure(f"Malformed user payload on {operation}") from exc
