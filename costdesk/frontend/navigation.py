"""
Route descriptors and the navigation tree.

Every page the application serves is described once, statically, by a
:class:`RouteConfig`: its URL path, the layout variant that draws its chrome,
a display title and an optional icon name.  :class:`Navigator` validates the
tree (unique paths, registered layouts) and answers the questions the page
chrome asks: which entries to show in the sidebar, which one is active, and
where a path redirects to.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from enum import Enum
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict
from starlette.responses import Response

from costdesk.backend.core.errors import NavigationError

logger = logging.getLogger(__name__)


class LayoutName(str, Enum):
    DEFAULT = "default"
    DASHBOARD = "dashboard"
    FILTER = "filter"


class RouteConfig(BaseModel):
    """Static metadata for one navigable path."""

    model_config = ConfigDict(frozen=True)

    path: str
    layout: LayoutName = LayoutName.DEFAULT
    title: str
    icon: str | None = None
    children: tuple[RouteConfig, ...] = ()


class NavItem(BaseModel):
    """A route descriptor resolved against the current request path."""

    path: str
    title: str
    icon: str | None = None
    active: bool = False
    depth: int = 0


NAVIGATION: tuple[RouteConfig, ...] = (
    RouteConfig(path="/", title="Home", icon="home"),
    RouteConfig(path="/dashboard", layout=LayoutName.DASHBOARD, title="Dashboard", icon="bar-chart"),
    RouteConfig(
        path="/projects",
        title="Projects",
        icon="briefcase",
        children=(
            RouteConfig(path="/projects/{id}/bq", title="Bill of Quantities", icon="file-text"),
            RouteConfig(
                path="/projects/{id}/cost-control",
                layout=LayoutName.FILTER,
                title="Cost Control",
                icon="receipt",
            ),
        ),
    ),
)

# Paths that forward to a default sub-route without rendering anything.
REDIRECTS: dict[str, str] = {
    "/projects/{id}": "/projects/{id}/bq",
}


def fill_path(template: str, **params: str) -> str:
    """Substitute ``{name}`` placeholders in a route path, percent-encoding each value."""
    path = template
    for name, value in params.items():
        path = path.replace("{" + name + "}", quote(str(value), safe=""))
    return path


def _walk(routes: tuple[RouteConfig, ...], depth: int = 0) -> Iterator[tuple[RouteConfig, int]]:
    for route in routes:
        yield route, depth
        yield from _walk(route.children, depth + 1)


class Navigator:
    """
    Read-only view over a validated navigation tree.

    Args:
        routes: Top-level route descriptors, in display order
        layouts: Names of the registered layout variants

    Raises:
        NavigationError: On a duplicate path or an unregistered layout
    """

    def __init__(
        self,
        routes: tuple[RouteConfig, ...] = NAVIGATION,
        layouts: Mapping[str, object] | None = None,
        redirects: Mapping[str, str] | None = None,
    ) -> None:
        if layouts is None:
            from costdesk.frontend.layouts import LAYOUTS

            layouts = LAYOUTS
        self.routes = routes
        self.redirects = dict(REDIRECTS if redirects is None else redirects)
        self._by_path: dict[str, RouteConfig] = {}

        for route, _depth in _walk(routes):
            if route.path in self._by_path:
                raise NavigationError(f"Duplicate route path: {route.path}")
            if route.layout.value not in layouts:
                raise NavigationError(f"Route {route.path} uses unregistered layout {route.layout.value!r}")
            self._by_path[route.path] = route

        logger.debug("Navigation tree validated: %d routes", len(self._by_path))

    def __iter__(self) -> Iterator[tuple[RouteConfig, int]]:
        return _walk(self.routes)

    def __len__(self) -> int:
        return len(self._by_path)

    def find(self, path: str) -> RouteConfig | None:
        return self._by_path.get(path)

    def layout_for(self, path: str) -> LayoutName:
        route = self.find(path)
        return route.layout if route is not None else LayoutName.DEFAULT

    def sidebar(self, current_path: str) -> list[NavItem]:
        """Top-level entries with the one containing ``current_path`` marked active."""
        items = []
        for route in self.routes:
            if route.path == "/":
                active = current_path == "/"
            else:
                active = current_path == route.path or current_path.startswith(route.path + "/")
            items.append(NavItem(path=route.path, title=route.title, icon=route.icon, active=active))
        return items

    def redirect_target(self, template: str, **params: str) -> str | None:
        """Where ``template`` forwards to, with placeholders filled, or ``None``."""
        target = self.redirects.get(template)
        if target is None:
            return None
        return fill_path(target, **params)

    @staticmethod
    def redirect_after(response: Response, target: str, delay_seconds: int) -> Response:
        """Ask the browser to navigate to ``target`` after ``delay_seconds``."""
        response.headers["Refresh"] = f"{delay_seconds}; url={target}"
        return response
