"""
Template rendering utilities
"""
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from jinja2 import TemplateError, TemplateNotFound

from formwizard.core.logging_config import LoggingConfig

logger = LoggingConfig.get_logger(__name__)

TEMPLATE_SUFFIX = ".html"

# Every view the routes can render
REQUIRED_VIEWS = (
    "home",
    "page-form-one",
    "page-form-two",
    "page-form-three",
    "form-one",
    "form-two",
    "form-three",
    "form-submitted",
)


class TemplateLoadError(RuntimeError):
    """Raised when the template set cannot be loaded at start-up"""


class TemplateRenderer:
    """
    Read-only handle over the view templates.

    A view name maps to ``<view>.html`` inside the template directory.
    Built once at start-up and shared by all requests.
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)
        self._templates = Jinja2Templates(directory=str(self.directory))

    @staticmethod
    def template_name(view: str) -> str:
        return f"{view}{TEMPLATE_SUFFIX}"

    def check(self, views: Iterable[str] = REQUIRED_VIEWS) -> None:
        """
        Load and compile every view so broken templates fail start-up

        Raises:
            TemplateLoadError: directory missing, or a view is absent or unparsable
        """
        views = tuple(views)
        if not self.directory.is_dir():
            raise TemplateLoadError(f"Template directory not found: {self.directory}")

        for view in views:
            name = self.template_name(view)
            try:
                self._templates.get_template(name)
            except TemplateNotFound as e:
                raise TemplateLoadError(f"Missing template for view '{view}': {name}") from e
            except TemplateError as e:
                raise TemplateLoadError(f"Cannot load template for view '{view}': {e}") from e

        logger.info(
            "Templates loaded",
            extra={"templates_dir": str(self.directory), "views": len(views)}
        )

    def render(
        self,
        request: Request,
        view: str,
        data: Optional[Dict[str, Any]] = None,
        status_code: int = 200,
    ) -> HTMLResponse:
        """Render a view as a complete HTML response"""
        return self._templates.TemplateResponse(
            request,
            self.template_name(view),
            dict(data or {}),
            status_code=status_code,
        )


def get_renderer(request: Request) -> TemplateRenderer:
    """FastAPI dependency returning the application's renderer"""
    return request.app.state.renderer
