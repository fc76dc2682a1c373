"""
Template rendering utilities.

One Jinja2Templates instance serves every page. Handlers receive it through
the `Templates` dependency (catalog.dependencies) so tests can replace it.
"""

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from catalog.config import get_settings

settings = get_settings()

templates = Jinja2Templates(directory=settings.templates_dir)
templates.env.globals["app_name"] = settings.app_name
templates.env.globals["catalog_prefix"] = settings.catalog_prefix


def get_templates() -> Jinja2Templates:
    """Template collaborator dependency."""
    return templates


def render_error(
    request: Request,
    status_code: int,
    message: str,
    headers: dict | None = None,
) -> Response:
    """Render the shared error page."""
    return templates.TemplateResponse(
        request,
        "error.html",
        {"title": "Error", "message": message, "status_code": status_code},
        status_code=status_code,
        headers=headers,
    )
