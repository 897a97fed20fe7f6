"""Shared pytest fixtures for the test suite.

Import any of these in a test file by simply declaring the fixture name as a
parameter — pytest discovers them automatically from this conftest.py.

Fixture overview
----------------
settings    — default :class:`Settings` (no config file involved)
backend     — in-memory stand-in for the hosted data service, served through
              ``httpx.MockTransport``; set ``fail_with`` to make every
              request fail
client      — ``TestClient`` for an application wired to ``backend``
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from costdesk.backend.api.app import create_app
from costdesk.backend.core.utils.config import Settings

SINGLE_OBJECT = "application/vnd.pgrst.object+json"


class FakeBackend:
    """Answers PostgREST-style reads from in-memory tables."""

    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {
            "projects": [
                {"id": "p1", "name": "Riverside Tower", "status": "active", "estimated_cost": 1000.0},
                {"id": "p2", "name": "Harbour Bridge", "status": "planning", "estimated_cost": 500.0},
            ],
        }
        self.fail_with: int | None = None
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            return httpx.Response(self.fail_with, json={"message": "relation unavailable", "code": "XX000"})

        table = request.url.path.rsplit("/", 1)[-1]
        rows = list(self.tables.get(table, []))
        for key, value in request.url.params.items():
            if value.startswith("eq."):
                rows = [row for row in rows if str(row.get(key)) == value[3:]]
        if "limit" in request.url.params:
            rows = rows[: int(request.url.params["limit"])]

        if request.headers.get("accept") == SINGLE_OBJECT:
            if len(rows) != 1:
                return httpx.Response(
                    406,
                    json={
                        "code": "PGRST116",
                        "details": f"The result contains {len(rows)} rows",
                        "message": "JSON object requested, multiple (or no) rows returned",
                    },
                )
            return httpx.Response(200, json=rows[0])
        return httpx.Response(200, json=rows)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def transport(backend: FakeBackend) -> httpx.MockTransport:
    return httpx.MockTransport(backend.handler)


@pytest.fixture
def client(settings: Settings, transport: httpx.MockTransport) -> Iterator[TestClient]:
    app = create_app(settings, transport=transport)
    with TestClient(app) as test_client:
        yield test_client
