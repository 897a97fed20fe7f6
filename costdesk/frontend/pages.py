"""Page route handlers.

Every handler renders a page body inside a layout variant; project pages
load their project through a :class:`RecordLoader` and render a placeholder,
the content, a not-found page or the error boundary depending on how the
fetch settled.

Tab selection travels through the tab links: each tab's ``href`` carries the
new id, and the next request renders with that tab active.  The change
callbacks handed to :class:`TabNavigation` here therefore have nothing to do.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from costdesk.backend.core.errors import BackendError
from costdesk.backend.core.record_loader import LoaderSnapshot, LoadState, RecordLoader
from costdesk.backend.schemas import Project, ProjectStats
from costdesk.frontend.boundary import error_boundary
from costdesk.frontend.navigation import LayoutName, Navigator
from costdesk.frontend.rendering import render_page
from costdesk.frontend.tabs import (
    COST_CONTROL_TABS,
    DEFAULT_COST_CONTROL_TAB,
    TabNavigation,
    cost_control_links,
    project_tabs,
)

logger = logging.getLogger(__name__)

router = APIRouter(default_response_class=HTMLResponse)


def _follow_link(tab_id: str) -> None:
    pass


async def _load_project(request: Request, project_id: str) -> LoaderSnapshot[Project]:
    """
    Fetch the project, waiting at most ``ui.placeholder_after_seconds``.

    A fetch still running after that returns a ``LOADING`` snapshot; leaving
    the ``async with`` block disposes the loader and cancels the fetch.
    """
    context = request.app.state.context
    async with RecordLoader(context.fetch_project) as loader:
        loader.subscribe(lambda snapshot: logger.debug("Project %r: %s", snapshot.identifier, snapshot.state.value))
        loader.load(project_id)
        return await loader.wait(timeout=context.settings.ui.placeholder_after_seconds)


def _project_outcome(request: Request, snapshot: LoaderSnapshot[Project]):
    """Response for a project fetch that did not load, or ``None`` when it did."""
    if snapshot.state is LoadState.LOADED:
        return None
    if snapshot.state is LoadState.NOT_FOUND:
        return render_page(
            request,
            LayoutName.DEFAULT,
            "pages/not_found.html",
            status_code=404,
            title="Project not found",
            project_id=snapshot.identifier,
        )
    if snapshot.state is LoadState.ERROR and snapshot.error is not None:
        raise snapshot.error
    # Still loading: show the placeholder and ask the browser to come back.
    delay = request.app.state.context.settings.ui.loading_refresh_seconds
    response = render_page(request, LayoutName.DEFAULT, "pages/placeholder.html", title="Loading project")
    return Navigator.redirect_after(response, str(request.url), delay)


def _project_header(request: Request, project: Project) -> tuple[TabNavigation, dict]:
    """Section tabs and template variables for the project header."""
    tabs = project_tabs(project.id, request.url.path, request.query_params.get("tab"), on_change=_follow_link)
    return tabs, {"project": project, "project_tabs": tabs.views()}


# ── Routes ─────────────────────────────────────────────────────────────────


@router.get("/", name="home")
@error_boundary()
async def home(request: Request):
    return render_page(request, LayoutName.DEFAULT, "pages/home.html", title="Home")


@router.get("/welcome", name="welcome")
@error_boundary()
async def welcome(request: Request):
    """Notice page that forwards to the project list after a fixed delay."""
    delay = request.app.state.context.settings.ui.redirect_delay_seconds
    response = render_page(
        request,
        LayoutName.DEFAULT,
        "pages/welcome.html",
        title="Welcome",
        redirect_to="/projects",
        redirect_delay=delay,
    )
    return Navigator.redirect_after(response, "/projects", delay)


@router.get("/dashboard", name="dashboard")
@error_boundary("Dashboard")
async def dashboard(request: Request):
    context = request.app.state.context
    try:
        stats = ProjectStats.from_projects(await context.list_projects())
    except BackendError as exc:
        logger.error("Error fetching projects for the dashboard: %s", exc)
        stats = ProjectStats()
    return render_page(request, LayoutName.DASHBOARD, "pages/dashboard.html", title="Dashboard", stats=stats)


@router.get("/projects", name="projects")
@error_boundary("Projects")
async def projects(request: Request):
    project_list = await request.app.state.context.list_projects()
    return render_page(request, LayoutName.DEFAULT, "pages/projects.html", title="Projects", projects=project_list)


@router.get("/projects/{project_id}", name="project")
async def project_root(request: Request, project_id: str) -> RedirectResponse:
    target = request.app.state.context.navigator.redirect_target("/projects/{id}", id=project_id)
    return RedirectResponse(target, status_code=307)


@router.get("/projects/{project_id}/bq", name="project_bq")
@error_boundary("Bill of Quantities")
async def project_bq(request: Request, project_id: str):
    snapshot = await _load_project(request, project_id)
    outcome = _project_outcome(request, snapshot)
    if outcome is not None:
        return outcome

    tabs, header = _project_header(request, snapshot.record)
    return render_page(
        request,
        LayoutName.DEFAULT,
        "pages/project_bq.html",
        title=snapshot.record.name or project_id,
        section=tabs.active_tab,
        **header,
    )


@router.get("/projects/{project_id}/cost-control", name="cost_control")
@error_boundary("Cost Control")
async def cost_control(request: Request, project_id: str):
    snapshot = await _load_project(request, project_id)
    outcome = _project_outcome(request, snapshot)
    if outcome is not None:
        return outcome

    _, header = _project_header(request, snapshot.record)
    active_tab = request.query_params.get("tab", DEFAULT_COST_CONTROL_TAB)
    tabs = TabNavigation(COST_CONTROL_TABS, active_tab, on_change=_follow_link)
    return render_page(
        request,
        LayoutName.FILTER,
        "pages/cost_control.html",
        title="Cost Control",
        tabs=tabs.views(),
        active_tab=tabs.active_tab,
        filter_title="Cost Management",
        filter_links=cost_control_links(project_id, active_tab),
        **header,
    )
