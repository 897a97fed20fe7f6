"""
Tests for the controlled tab navigation component and the project tab sets.
"""

from __future__ import annotations

import pytest

from costdesk.frontend.tabs import (
    COST_CONTROL_TABS,
    PROJECT_TABS,
    Tab,
    TabNavigation,
    active_project_tab,
    cost_control_links,
    project_tab_target,
    project_tabs,
)

TABS = (Tab("a", "Alpha"), Tab("b", "Beta"), Tab("c", "Gamma"))


class TestTabNavigation:
    def test_selecting_other_tab_calls_back_once_with_its_id(self) -> None:
        calls: list[str] = []
        nav = TabNavigation(TABS, "a", calls.append)

        nav.select("b")

        assert calls == ["b"]

    def test_selection_state_stays_with_caller(self) -> None:
        calls: list[str] = []
        nav = TabNavigation(TABS, "a", calls.append)
        nav.select("b")
        assert nav.active_id == "a"

    def test_reselecting_active_tab_is_silent(self) -> None:
        calls: list[str] = []
        TabNavigation(TABS, "a", calls.append).select("a")
        assert calls == []

    def test_unknown_selection_raises(self) -> None:
        with pytest.raises(ValueError):
            TabNavigation(TABS, "a", lambda tab_id: None).select("z")

    def test_duplicate_ids_rejected(self) -> None:
        with pytest.raises(ValueError, match="a"):
            TabNavigation((Tab("a", "One"), Tab("a", "Two")), "a", lambda tab_id: None)

    def test_views_mark_only_active_tab(self) -> None:
        views = TabNavigation(TABS, "b", lambda tab_id: None).views()
        assert [view.active for view in views] == [False, True, False]
        assert views[1].href == "?tab=b"

    def test_unmatched_active_id_marks_nothing(self) -> None:
        nav = TabNavigation(TABS, "missing", lambda tab_id: None)
        assert not any(view.active for view in nav.views())
        assert nav.active_tab is None


class TestProjectTabs:
    def test_cost_control_tab_routes_to_cost_control_page(self) -> None:
        assert project_tab_target("p1", "cost-control") == "/projects/p1/cost-control"

    def test_other_tabs_route_to_bq_with_query(self) -> None:
        assert project_tab_target("p1", "program") == "/projects/p1/bq?tab=program"

    def test_targets_encode_project_id(self) -> None:
        assert project_tab_target("a?b", "program") == "/projects/a%3Fb/bq?tab=program"
        assert cost_control_links("a#b", None)[0]["href"] == "/projects/a%23b/cost-control"

    @pytest.mark.parametrize(
        ("path", "requested", "expected"),
        [
            ("/projects/p1/bq", None, "estimate"),
            ("/projects/p1/bq", "financial", "financial"),
            ("/projects/p1/cost-control", "financial", "cost-control"),
        ],
    )
    def test_active_project_tab(self, path: str, requested: str | None, expected: str) -> None:
        assert active_project_tab(path, requested) == expected

    def test_project_tab_hrefs(self) -> None:
        views = project_tabs("p1", "/projects/p1/bq", None, lambda tab_id: None).views()
        assert [view.id for view in views] == [tab.id for tab in PROJECT_TABS]
        assert views[0].active
        assert views[1].href == "/projects/p1/cost-control"

    def test_cost_control_links(self) -> None:
        links = cost_control_links("p1", "bills")
        active = [link["name"] for link in links if link["active"]]
        assert active == ["Bills"]
        assert links[0]["href"] == "/projects/p1/cost-control"

    def test_cost_control_tab_ids_unique(self) -> None:
        ids = [tab.id for tab in COST_CONTROL_TABS]
        assert len(ids) == len(set(ids)) == 6
