"""
Shared fixtures: an in-memory stand-in for the hosted user collection,
served to httpx through MockTransport.
"""
import asyncio
import json
from datetime import datetime, timezone

import httpx
import pytest

BASE_URL = "http://remote.test/api/v1/users"


class FakeCollection:
    """Mimics the hosted collection: string ids, createdAt, 404 on unknown ids."""

    def __init__(self, records=()):
        self.records = {}
        self.calls = []
        self.failures = {}
        self.latencies = []
        self._next_id = 1
        for r in records:
            self.add(**r)

    def add(self, name, email, role="", **extra):
        user_id = str(extra.pop("id", self._next_id))
        self._next_id = max(self._next_id, int(user_id)) + 1
        self.records[user_id] = {
            "id": user_id,
            "createdAt": datetime.now(timezone.utc).isoformat(),
            "name": name, "email": email, "role": role,
            "avatar": extra.pop("avatar", ""),
            **extra,
        }
        return self.records[user_id]

    def fail(self, method, how):
        """how: "down" raises a transport error, an int answers with that status."""
        self.failures[method] = how

    def count(self, method=None):
        return len([c for c in self.calls if method is None or c[0] == method])

    @property
    def transport(self):
        return httpx.MockTransport(self.handle)

    def client(self):
        return httpx.AsyncClient(transport=self.transport)

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.calls.append((request.method, request.url.path))
        if self.latencies:
            await asyncio.sleep(self.latencies.pop(0))

        how = self.failures.get(request.method)
        if how == "down":
            raise httpx.ConnectError("connection refused", request=request)
        if isinstance(how, int):
            return httpx.Response(how, json={"error": "upstream failure"})

        parts = request.url.path.rstrip("/").split("/")
        user_id = parts[4] if len(parts) > 4 else None

        if user_id is None:
            if request.method == "GET":
                return httpx.Response(200, json=list(self.records.values()))
            if request.method == "POST":
                body = json.loads(request.content or b"{}")
                return httpx.Response(201, json=self.add(**body))
            return httpx.Response(405, json="Method not allowed")

        if user_id not in self.records:
            return httpx.Response(404, json="Not found")
        if request.method == "GET":
            return httpx.Response(200, json=self.records[user_id])
        if request.method == "PUT":
            self.records[user_id].update(json.loads(request.content or b"{}"))
            return httpx.Response(200, json=self.records[user_id])
        if request.method == "DELETE":
            return httpx.Response(200, json=self.records.pop(user_id))
        return httpx.Response(405, json="Method not allowed")


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def store():
    return FakeCollection([
        {"name": "Ann", "email": "a@x.com", "role": "admin"},
        {"name": "Bob", "email": "bob@x.com", "role": "editor",
         "child": {"firstname": "Tim", "lastname": "Bobson"}},
        {"name": "Cleo", "email": "cleo@y.org", "role": "admin"},
    ])
