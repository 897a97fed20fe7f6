"""Project record as returned by the data service.

The page layer reads only the identifier and a few display fields; every
other column is kept untouched in the model's extra data.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Project(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    name: str = ""
    status: str | None = None
    estimated_cost: float | None = None

    @property
    def initial(self) -> str:
        """First letter of the name, upper-cased, for the avatar badge."""
        return self.name[:1].upper() or "?"


class ProjectStats(BaseModel):
    """Dashboard figures derived from the project list."""

    total_projects: int = 0
    active_projects: int = 0
    total_cost: float = 0.0

    @classmethod
    def from_projects(cls, projects: list[Project]) -> ProjectStats:
        return cls(
            total_projects=len(projects),
            active_projects=sum(1 for p in projects if p.status == "active"),
            total_cost=sum(p.estimated_cost or 0.0 for p in projects),
        )
