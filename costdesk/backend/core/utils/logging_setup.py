"""
Logging Setup Utilities.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.logging import RichHandler

# Polled endpoints kept out of the uvicorn access log.
QUIET_PATHS: tuple[str, ...] = ("/api/health",)


def setup_logging(
    level: int = logging.INFO,
    log_file: Path | None = None,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Logging level
        log_file: Optional file path for logging output
    """
    console_format = "%(message)s"
    file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    # Console handler with Rich
    console_handler = RichHandler(
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(console_format))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(file_format))
        root_logger.addHandler(file_handler)

    # Reduce verbosity of the HTTP client stack
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


class QuietPollFilter(logging.Filter):
    """Drop uvicorn access-log records for health-probe polls."""

    def __init__(self, paths: tuple[str, ...] = QUIET_PATHS) -> None:
        super().__init__()
        self.paths = paths

    def filter(self, record: logging.LogRecord) -> bool:
        msg = record.getMessage()
        return not any(path in msg for path in self.paths)


def install_access_log_filter() -> None:
    """Attach the filter to uvicorn's access logger once."""
    uvicorn_access = logging.getLogger("uvicorn.access")
    if not any(isinstance(f, QuietPollFilter) for f in uvicorn_access.filters):
        uvicorn_access.addFilter(QuietPollFilter())
