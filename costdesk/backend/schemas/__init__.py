"""Schema package – re-exports all public symbols for convenient imports."""

from __future__ import annotations

from costdesk.backend.schemas.health import (
    CacheDetailsOut,
    CacheHealthOut,
    CacheUnhealthyOut,
    DatabaseHealthOut,
    DatabaseUnhealthyOut,
    HealthOut,
    ServicesOut,
    UnhealthyOut,
)
from costdesk.backend.schemas.project import Project, ProjectStats

__all__ = [
    "CacheDetailsOut",
    "CacheHealthOut",
    "CacheUnhealthyOut",
    "DatabaseHealthOut",
    "DatabaseUnhealthyOut",
    "HealthOut",
    "Project",
    "ProjectStats",
    "ServicesOut",
    "UnhealthyOut",
]
