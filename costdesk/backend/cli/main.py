#!/usr/bin/env python3
"""
Command-line entry point.

    costdesk serve --config configs/default_config.yaml --port 8000
    costdesk routes
"""

from __future__ import annotations

import logging
import os

import click
import uvicorn
from rich.console import Console
from rich.tree import Tree

from costdesk.backend.core.utils.config import DEFAULT_CONFIG_PATH, load_settings
from costdesk.backend.core.utils.logging_setup import setup_logging
from costdesk.frontend.navigation import Navigator

console = Console()


def _log_level(verbose: bool, debug: bool) -> int:
    return logging.DEBUG if debug else (logging.INFO if verbose else logging.WARNING)


@click.group()
def main() -> None:
    """Construction Project Manager web front-end."""


@main.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    default=DEFAULT_CONFIG_PATH,
    help="Path to configuration file.",
)
@click.option("--host", default="127.0.0.1", help="Interface to bind.")
@click.option("--port", "-p", type=int, default=8000, help="Port to listen on.")
@click.option("--reload", is_flag=True, default=False, help="Reload on code changes.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose output.")
@click.option("--debug", is_flag=True, default=False, help="Enable debug logging.")
def serve(config: str, host: str, port: int, reload: bool, verbose: bool, debug: bool) -> None:
    """Run the web application with uvicorn."""
    level = _log_level(verbose, debug)
    setup_logging(level)
    logger = logging.getLogger(__name__)

    try:
        settings = load_settings(config)
    except Exception as e:
        console.print(f"\n[bold red]Configuration error:[/bold red] {e}")
        logger.exception("Could not load configuration")
        raise SystemExit(1) from e

    # The factory reloads the settings in the server process from this path.
    os.environ["COSTDESK_CONFIG"] = config
    console.print(
        f"[bold cyan]{settings.app.name}[/bold cyan] ({settings.app.environment}) on http://{host}:{port}"
    )
    uvicorn.run(
        "costdesk.backend.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=logging.getLevelName(level).lower(),
    )


@main.command()
def routes() -> None:
    """Print the navigation tree."""
    navigator = Navigator()
    tree = Tree("[bold]Navigation[/bold]")
    branches = {0: tree}
    for route, depth in navigator:
        label = f"{route.path}  [dim]{route.title} · {route.layout.value}[/dim]"
        branches[depth + 1] = branches[depth].add(label)
    console.print(tree)
    for source, target in navigator.redirects.items():
        console.print(f"  {source} → {target}")


if __name__ == "__main__":
    main()
