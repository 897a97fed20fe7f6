"""Services package – re-exports all public service functions."""

from __future__ import annotations

from costdesk.backend.services.data_client import DataService
from costdesk.backend.services.health import check_cache, check_database, check_database_detail

__all__ = ["DataService", "check_cache", "check_database", "check_database_detail"]
