"""
Page shell and layout variants.

The shell wraps page content with chrome in a fixed order: sidebar, header,
main content, footer.  A layout variant is the shell plus at most a few
auxiliary chrome elements inserted right after the header (the dashboard's
quick-actions bar, the cost-control filter panel).  Variants are picked by
the caller, never computed from the content.

Composition only decides *which* chrome surrounds the content and in what
order; the markup for each slot lives in ``templates/chrome/<slot>.html``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from costdesk.frontend.navigation import LayoutName


class Slot(str, Enum):
    SIDEBAR = "sidebar"
    HEADER = "header"
    QUICK_ACTIONS = "quick_actions"
    FILTERS = "filters"
    MAIN = "main"
    FOOTER = "footer"


@dataclass(frozen=True)
class ChromeElement:
    slot: Slot
    content: str | None = None

    @property
    def template(self) -> str:
        return f"chrome/{self.slot.value}.html"


@dataclass(frozen=True)
class PageShell:
    """Fixed chrome around arbitrary content."""

    chrome: tuple[Slot, ...] = (Slot.SIDEBAR, Slot.HEADER, Slot.MAIN, Slot.FOOTER)

    def compose(self, content: str) -> list[ChromeElement]:
        """Return the chrome in render order; only the main slot carries ``content``."""
        return [ChromeElement(slot, content if slot is Slot.MAIN else None) for slot in self.chrome]

    def with_auxiliary(self, auxiliary: tuple[Slot, ...]) -> PageShell:
        if not auxiliary:
            return self
        at = self.chrome.index(Slot.HEADER) + 1
        return PageShell(chrome=self.chrome[:at] + auxiliary + self.chrome[at:])


@dataclass(frozen=True)
class LayoutVariant:
    name: str
    auxiliary: tuple[Slot, ...] = ()
    shell: PageShell = field(default_factory=PageShell)

    @property
    def chrome(self) -> tuple[Slot, ...]:
        return self.shell.with_auxiliary(self.auxiliary).chrome

    def compose(self, content: str) -> list[ChromeElement]:
        return self.shell.with_auxiliary(self.auxiliary).compose(content)


LAYOUTS: dict[str, LayoutVariant] = {
    LayoutName.DEFAULT.value: LayoutVariant(LayoutName.DEFAULT.value),
    LayoutName.DASHBOARD.value: LayoutVariant(LayoutName.DASHBOARD.value, auxiliary=(Slot.QUICK_ACTIONS,)),
    LayoutName.FILTER.value: LayoutVariant(LayoutName.FILTER.value, auxiliary=(Slot.FILTERS,)),
}


def get_layout(name: str | LayoutName) -> LayoutVariant:
    """Look up a registered variant.

    Raises:
        KeyError: If no variant is registered under ``name``
    """
    key = name.value if isinstance(name, LayoutName) else name
    try:
        return LAYOUTS[key]
    except KeyError:
        raise KeyError(f"Unknown layout variant: {key!r}") from None


# ── Quick actions (dashboard variant) ────────────────────────────────────────


@dataclass(frozen=True)
class QuickAction:
    id: str
    title: str
    description: str
    icon: str
    href: str


QUICK_ACTIONS: tuple[QuickAction, ...] = (
    QuickAction("new-project", "New Project", "Create a new construction project", "plus", "/projects/new"),
    QuickAction("new-estimate", "New Estimate", "Create a bill of quantities", "file-text", "/estimates/new"),
    QuickAction("manage-team", "Manage Team", "Add or manage team members", "users", "/admin/users"),
    QuickAction("analytics", "View Analytics", "Check project performance", "bar-chart", "/analytics"),
    QuickAction("settings", "Settings", "Configure application settings", "settings", "/settings"),
)


def quick_actions(max_actions: int = 5) -> tuple[QuickAction, ...]:
    return QUICK_ACTIONS[: max(max_actions, 0)]
