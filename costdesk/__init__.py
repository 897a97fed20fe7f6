"""Top-level costdesk package.

Sub-packages
------------
costdesk.backend
    FastAPI server (api/), context and fetch loader (core/), schemas/, services/
costdesk.frontend
    Server-rendered pages: layouts, navigation, tabs and Jinja2 templates
"""

from __future__ import annotations

__version__ = "0.1.0"
