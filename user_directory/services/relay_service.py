# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Relay service: forwards /users calls to the hosted collection unchanged."""
import time

import httpx
from fastapi import Request, Response
from fastapi.responses import JSONResponse

from user_directory.core.config import settings
from user_directory.core.logging import get_logger
from user_directory.metrics import RELAY_LATENCY, RELAY_REQUESTS

logger = get_logger(__name__)

HOP_HEADERS = ("host", "content-length", "transfer-encoding", "connection")


class RelayService:
    def __init__(self, http_client: httpx.AsyncClient, base_url: str | None = None):
        self._client = http_client
        self._base_url = (base_url or settings.REMOTE_COLLECTION_URL).rstrip("/")

    def target(self, user_id: str | None = None) -> str:
        return f"{self._base_url}/{user_id}" if user_id else self._base_url

    async def relay(self, request: Request, failure_message: str,
                    user_id: str | None = None) -> Response:
        url = self.target(user_id)
        body = await request.body()
        headers = {k: v for k, v in request.headers.items() if k.lower() not in HOP_HEADERS}

        start = time.monotonic()
        try:
            resp = await self._client.request(
                method=request.method, url=url,
                content=body if body else None,
                headers=headers, params=dict(request.query_params),
            )
        except httpx.RequestError as exc:
            RELAY_REQUESTS.labels(method=request.method, status="500").inc()
            logger.error("%s: %s %s unreachable: %s", failure_message, request.method, url, exc)
            return JSONResponse(status_code=500, content={"error": failure_message})

        RELAY_REQUESTS.labels(method=request.method, status=str(resp.status_code)).inc()
        RELAY_LATENCY.labels(method=request.method).observe(time.monotonic() - start)
        if not resp.is_success:
            logger.warning("Upstream returned %s for %s %s", resp.status_code, request.method, url)

        out_headers = {
            k: v for k, v in resp.headers.items()
            if k.lower() not in HOP_HEADERS and k.lower() != "content-encoding"
        }
        return Response(
            content=resp.content, status_code=resp.status_code,
            headers=out_headers,
            media_type=resp.headers.get("content-type"),
        )

    async def ping(self) -> bool:
        try:
            resp = await self._client.get(self._base_url)
        except httpx.RequestError as exc:
            logger.warning("Remote collection unreachable: %s", exc)
            return False
        return resp.is_success
