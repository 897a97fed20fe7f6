"""
Tab navigation.

:class:`TabNavigation` is a controlled component: the caller owns the active
tab id and passes a change callback; the component only renders the tab bar
and reports selections.  The tab sets used by the project pages are defined
at the bottom of the module.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from costdesk.frontend.navigation import fill_path


@dataclass(frozen=True)
class Tab:
    id: str
    label: str


@dataclass(frozen=True)
class TabView:
    """One rendered tab trigger."""

    id: str
    label: str
    active: bool
    href: str


class TabNavigation:
    """
    Render a tab bar and forward selections to the caller.

    Args:
        tabs: Tabs in display order; ids must be unique
        active_id: Id of the tab the caller considers active.  An id that
            matches no tab leaves every tab inactive.
        on_change: Called with the newly selected id by :meth:`select`
        href: Maps a tab id to the URL its trigger links to.  On
            server-rendered pages the link is how a selection arrives: the
            next request is rendered with the new id as ``active_id``.

    Raises:
        ValueError: If two tabs share an id
    """

    def __init__(
        self,
        tabs: Sequence[Tab],
        active_id: str | None,
        on_change: Callable[[str], None],
        href: Callable[[str], str] | None = None,
    ) -> None:
        ids = [tab.id for tab in tabs]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"Duplicate tab ids: {', '.join(duplicates)}")
        self.tabs = tuple(tabs)
        self.active_id = active_id
        self.on_change = on_change
        self.href = href or (lambda tab_id: f"?tab={tab_id}")

    @property
    def active_tab(self) -> Tab | None:
        return next((tab for tab in self.tabs if tab.id == self.active_id), None)

    def views(self) -> list[TabView]:
        return [TabView(tab.id, tab.label, tab.id == self.active_id, self.href(tab.id)) for tab in self.tabs]

    def select(self, tab_id: str) -> None:
        """
        Report a selection.

        The callback fires once, synchronously, when ``tab_id`` differs from
        the active id.  Re-selecting the active tab does nothing.

        Raises:
            ValueError: If ``tab_id`` is not one of the tabs
        """
        if all(tab.id != tab_id for tab in self.tabs):
            raise ValueError(f"Unknown tab id: {tab_id!r}")
        if tab_id != self.active_id:
            self.on_change(tab_id)


# ── Cost control ─────────────────────────────────────────────────────────────

COST_CONTROL_TABS: tuple[Tab, ...] = (
    Tab("summary", "Summary"),
    Tab("bills", "Bills"),
    Tab("cost-items", "Cost Items"),
    Tab("purchase-orders", "Purchase Orders"),
    Tab("work-done", "Work Done"),
    Tab("wages", "Wages"),
)
DEFAULT_COST_CONTROL_TAB = "summary"


@dataclass(frozen=True)
class SidebarLink:
    name: str
    icon: str
    suffix: str


# Filter-panel links shown beside the cost-control tabs.
COST_CONTROL_LINKS: tuple[SidebarLink, ...] = (
    SidebarLink("Summary", "file-text", ""),
    SidebarLink("Purchase Works", "briefcase", "?tab=purchase-orders"),
    SidebarLink("Bills", "receipt", "?tab=bills"),
    SidebarLink("Wages", "dollar-sign", "?tab=wages"),
    SidebarLink("Work Done", "check-square", "?tab=work-done"),
    SidebarLink("Cost Items", "list", "?tab=cost-items"),
)


def cost_control_links(project_id: str, active_tab: str | None) -> list[dict[str, object]]:
    base = fill_path("/projects/{id}/cost-control", id=project_id)
    links = []
    for link in COST_CONTROL_LINKS:
        tab = link.suffix.removeprefix("?tab=") or DEFAULT_COST_CONTROL_TAB
        links.append({"name": link.name, "icon": link.icon, "href": base + link.suffix, "active": tab == active_tab})
    return links


# ── Project sections ─────────────────────────────────────────────────────────

PROJECT_TABS: tuple[Tab, ...] = (
    Tab("estimate", "Estimate"),
    Tab("cost-control", "Cost Control"),
    Tab("proposal", "Daily Log"),
    Tab("program", "Program"),
    Tab("financial", "Financial Appraisal"),
)
DEFAULT_PROJECT_TAB = "estimate"


def project_tab_target(project_id: str, tab_id: str) -> str:
    """URL a project-section tab navigates to."""
    if tab_id == "cost-control":
        return fill_path("/projects/{id}/cost-control", id=project_id)
    return fill_path("/projects/{id}/bq", id=project_id) + f"?tab={tab_id}"


def active_project_tab(path: str, requested: str | None) -> str:
    """Active project-section tab for a request path and its ``tab`` query value."""
    if "/cost-control" in path:
        return "cost-control"
    return requested or DEFAULT_PROJECT_TAB


def project_tabs(project_id: str, path: str, requested: str | None, on_change: Callable[[str], None]) -> TabNavigation:
    return TabNavigation(
        PROJECT_TABS,
        active_project_tab(path, requested),
        on_change,
        href=lambda tab_id: project_tab_target(project_id, tab_id),
    )
