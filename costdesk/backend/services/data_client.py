"""Client for the hosted database service.

The service exposes a PostgREST-compatible interface under ``/rest/v1``:
one resource per table, equality filters written as ``column=eq.value`` and
single-object responses requested through the
``application/vnd.pgrst.object+json`` media type.  Only the handful of
read operations the pages and health probes need are implemented here.
"""

from __future__ import annotations

import logging
import re
from typing import Any

import httpx

from costdesk.backend.core.errors import BackendError, RecordNotFoundError

logger = logging.getLogger(__name__)

_SINGLE_OBJECT = "application/vnd.pgrst.object+json"
# PostgREST code for "singular response requested but row count != 1"
_SINGULAR_MISMATCH = "PGRST116"
_ZERO_ROWS = re.compile(r"\b0 rows\b")


class DataService:
    """
    Async query client for the hosted database service.

    Usage:
        data = DataService("https://example.supabase.co", api_key="...")
        project = await data.fetch_single("projects", "id", project_id)
        rows = await data.select("projects", limit=1)
        await data.aclose()

    Every failure surfaces as :class:`BackendError`, except a single-record
    query that matched nothing, which raises :class:`RecordNotFoundError`.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        schema: str = "public",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Accept-Profile": schema}
        if api_key:
            headers["apikey"] = api_key
            headers["Authorization"] = f"Bearer {api_key}"
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=f"{self.base_url}/rest/v1",
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def fetch_single(self, table: str, column: str, value: str) -> dict[str, Any]:
        """Return the one row of ``table`` where ``column`` equals ``value``."""
        response = await self._get(
            table,
            params={"select": "*", column: f"eq.{value}"},
            headers={"Accept": _SINGLE_OBJECT},
        )
        if response.status_code == 406:
            payload = _error_payload(response)
            if payload.get("code") == _SINGULAR_MISMATCH and _ZERO_ROWS.search(str(payload.get("details", ""))):
                raise RecordNotFoundError(table, column, value)
        _raise_for_backend_error(response)
        return response.json()

    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: dict[str, str] | None = None,
        order: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """
        Return rows of ``table``.

        Args:
            table: Table (resource) name
            columns: PostgREST ``select`` expression
            filters: Equality filters, column to value
            order: PostgREST ``order`` expression, e.g. ``"created_at.desc"``
            limit: Maximum number of rows
        """
        params: dict[str, Any] = {"select": columns}
        for column, value in (filters or {}).items():
            params[column] = f"eq.{value}"
        if order:
            params["order"] = order
        if limit is not None:
            params["limit"] = limit
        response = await self._get(table, params=params)
        _raise_for_backend_error(response)
        return response.json()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(self, table: str, params: dict[str, Any], headers: dict[str, str] | None = None) -> httpx.Response:
        try:
            return await self._client.get(f"/{table}", params=params, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("Data service request for %s failed: %s", table, exc)
            raise BackendError(f"Data service unreachable: {exc}") from exc


def _error_payload(response: httpx.Response) -> dict[str, Any]:
    try:
        payload = response.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


def _raise_for_backend_error(response: httpx.Response) -> None:
    if response.status_code < 400:
        return
    payload = _error_payload(response)
    message = payload.get("message") or response.reason_phrase or "Data service error"
    raise BackendError(message, status_code=response.status_code, code=payload.get("code"))
