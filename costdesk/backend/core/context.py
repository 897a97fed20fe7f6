"""Session-scoped application context.

Built once in the FastAPI lifespan and stored on ``app.state.context``;
request handlers reach the data client and the navigator through it instead
of module-level singletons.  ``aclose()`` releases the HTTP connection pool
on shutdown.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from costdesk.backend.core.utils.config import Settings
from costdesk.backend.schemas import Project
from costdesk.backend.services.data_client import DataService
from costdesk.frontend.navigation import Navigator

logger = logging.getLogger(__name__)

PROJECTS_TABLE = "projects"


@dataclass
class AppContext:
    settings: Settings
    data: DataService
    navigator: Navigator

    @classmethod
    def from_settings(cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> AppContext:
        data = DataService(
            settings.backend.url,
            api_key=settings.backend.api_key,
            schema=settings.backend.schema_name,
            timeout=settings.backend.timeout_seconds,
            transport=transport,
        )
        return cls(settings=settings, data=data, navigator=Navigator())

    async def fetch_project(self, project_id: str) -> Project:
        row = await self.data.fetch_single(PROJECTS_TABLE, "id", project_id)
        return Project.model_validate(row)

    async def list_projects(self) -> list[Project]:
        rows = await self.data.select(PROJECTS_TABLE)
        return [Project.model_validate(row) for row in rows]

    async def aclose(self) -> None:
        await self.data.aclose()
        logger.debug("Application context closed")
