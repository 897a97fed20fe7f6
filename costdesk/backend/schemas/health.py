"""Pydantic schemas for the health-probe responses.

Field names are snake_case in Python and camelCase on the wire; serialise
with ``model_dump(by_alias=True)``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# ── Database probe ──────────────────────────────────────────────────────────


class ServicesOut(BaseModel):
    database: str = "operational"
    application: str = "operational"


class HealthOut(BaseModel):
    status: str = "healthy"
    services: ServicesOut = ServicesOut()
    version: str
    environment: str
    timestamp: str


class UnhealthyOut(BaseModel):
    status: str = "unhealthy"
    error: str
    timestamp: str


class DatabaseHealthOut(BaseModel):
    """Detail probe: ``status`` is ``healthy`` or ``degraded``."""

    model_config = ConfigDict(populate_by_name=True)

    status: str
    database: str = "operational"
    response_time: int = Field(serialization_alias="responseTime")
    timestamp: str


class DatabaseUnhealthyOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str = "unhealthy"
    database: str = "error"
    error: str
    response_time: int = Field(serialization_alias="responseTime")
    timestamp: str


# ── Cache probe ─────────────────────────────────────────────────────────────


class CacheDetailsOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    provider: str
    hit_rate: float = Field(serialization_alias="hitRate")
    miss_rate: float = Field(serialization_alias="missRate")


class CacheHealthOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str = "healthy"
    cache: str = "operational"
    response_time: int = Field(serialization_alias="responseTime")
    timestamp: str
    details: CacheDetailsOut


class CacheUnhealthyOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str = "unhealthy"
    cache: str = "error"
    error: str
    response_time: int = Field(serialization_alias="responseTime")
    timestamp: str
