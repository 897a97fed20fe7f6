"""Error boundary for page handlers.

An exception raised while a page is rendered is logged and replaced by a
generic error page whose "Try again" link simply requests the same URL
again.  ``HTTPException`` passes through untouched.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import HTTPException, Request

from costdesk.frontend.navigation import LayoutName
from costdesk.frontend.rendering import render_page, templates

logger = logging.getLogger(__name__)


def render_error(request: Request, component_name: str | None = None):
    title = f"Error in {component_name}" if component_name else "Something went wrong"
    retry_href = str(request.url)
    try:
        return render_page(
            request,
            LayoutName.DEFAULT,
            "pages/error.html",
            status_code=500,
            title=title,
            retry_href=retry_href,
        )
    except Exception:
        # The chrome itself failed; fall back to the bare error template.
        logger.exception("Rendering the error page inside the shell failed")
        return templates.TemplateResponse(
            request,
            "pages/error.html",
            {"title": title, "retry_href": retry_href, "standalone": True},
            status_code=500,
        )


def error_boundary(component_name: str | None = None) -> Callable[[Callable[..., Awaitable[Any]]], Callable[..., Awaitable[Any]]]:
    """Wrap a page handler so render failures show the error page."""

    def decorator(handler: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
        @functools.wraps(handler)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await handler(*args, **kwargs)
            except HTTPException:
                raise
            except Exception:
                request: Request = kwargs["request"]
                logger.exception("Page %s failed to render", request.url.path)
                return render_error(request, component_name)

        return wrapper

    return decorator
