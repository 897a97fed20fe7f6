"""Exception hierarchy shared by the backend and the page layer."""

from __future__ import annotations


class CostDeskError(Exception):
    """Base class for every error raised by costdesk itself."""


class ConfigurationError(CostDeskError):
    """The configuration file or an environment override is invalid."""


class BackendError(CostDeskError):
    """The hosted data service answered with an error payload.

    Attributes:
        status_code: HTTP status returned by the service (0 when the request
            never reached it).
        message: Human-readable message from the service, if any.
        code: Service-specific error code, if any.
    """

    def __init__(self, message: str, status_code: int = 0, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code


class RecordNotFoundError(CostDeskError):
    """A single-record query matched no row."""

    def __init__(self, table: str, column: str, value: str) -> None:
        super().__init__(f"No row in {table!r} where {column} = {value!r}")
        self.table = table
        self.column = column
        self.value = value


class NavigationError(CostDeskError):
    """The static navigation tree breaks one of its invariants."""
