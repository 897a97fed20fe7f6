"""
Jinja2 Template Utilities.

Pages are rendered in two passes: the page body template first, then the
shell template of the chosen layout variant with the body placed in its main
slot.

Usage:
    return render_page(request, "default", "pages/projects.html", projects=projects)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import Request
from markupsafe import Markup
from starlette.templating import Jinja2Templates

from costdesk import __version__
from costdesk.frontend.layouts import get_layout, quick_actions
from costdesk.frontend.navigation import LayoutName, fill_path

_templates_dir = Path(__file__).parent / "templates"
templates = Jinja2Templates(directory=_templates_dir)
templates.env.globals["fill_path"] = fill_path


def get_template_context(request: Request, **kwargs: Any) -> dict[str, Any]:
    """
    Build a standard template context with common variables.

    Every template receives:
        - request: the request object (required for url_for)
        - app_name, version, environment: footer and title information
        - nav_items: sidebar entries with the active one marked
        - quick_actions: entries for the dashboard quick-actions bar
    """
    context = request.app.state.context
    settings = context.settings

    template_context = {
        "request": request,
        "app_name": settings.app.name,
        "version": __version__,
        "environment": settings.app.environment,
        "nav_items": context.navigator.sidebar(request.url.path),
        "quick_actions": quick_actions(settings.ui.max_quick_actions),
    }
    template_context.update(kwargs)
    return template_context


def render_body(template_name: str, context: dict[str, Any]) -> Markup:
    return Markup(templates.get_template(template_name).render(context))


def render_page(
    request: Request,
    layout: str | LayoutName,
    template_name: str,
    status_code: int = 200,
    headers: dict[str, str] | None = None,
    **kwargs: Any,
):
    """
    Render ``template_name`` inside the chrome of ``layout``.

    Returns:
        Starlette TemplateResponse
    """
    variant = get_layout(layout)
    context = get_template_context(request, layout=variant.name, **kwargs)
    body = render_body(template_name, context)
    context["chrome"] = variant.compose(body)
    return templates.TemplateResponse(request, "shell.html", context, status_code=status_code, headers=headers)
