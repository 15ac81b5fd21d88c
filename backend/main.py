"""
Main FastAPI application entry point
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from formwizard.api.routes import forms, health, metrics, pages
from formwizard.core.config import Settings, get_settings
from formwizard.core.logging_config import LoggingConfig
from formwizard.core.middleware import LoggingContextMiddleware
from formwizard.core.middleware_metrics import MetricsMiddleware
from formwizard.core.templates import TemplateRenderer

# Configure logging first
LoggingConfig.configure()

logger = LoggingConfig.get_logger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for FastAPI app"""
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode...")
    yield
    logger.info(f"Shutting down {settings.app_name}...")


async def global_exception_handler(request: Request, exc: Exception):
    """Log unhandled errors (template rendering included) and answer 500"""
    logger.error(
        "Unhandled exception",
        exc_info=exc,
        extra={
            "error": str(exc),
            "error_type": type(exc).__name__,
            "path": request.url.path,
            "method": request.method,
        }
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": str(exc),
            "type": type(exc).__name__
        }
    )


def create_app(
    settings: Optional[Settings] = None,
    renderer: Optional[TemplateRenderer] = None,
) -> FastAPI:
    """
    Build the application.

    The template set is loaded and checked here, so a missing or broken
    template raises TemplateLoadError before the server binds its port.
    """
    settings = settings or get_settings()
    if renderer is None:
        renderer = TemplateRenderer(settings.templates_path)
    renderer.check()

    app = FastAPI(
        title=settings.app_name,
        description="Three-step form wizard with htmx boosted navigation",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.renderer = renderer

    app.add_middleware(LoggingContextMiddleware)
    if settings.enable_metrics:
        app.add_middleware(MetricsMiddleware)

    app.add_exception_handler(Exception, global_exception_handler)

    app.include_router(pages.router)
    app.include_router(forms.router)
    app.include_router(health.router)
    if settings.enable_metrics:
        app.include_router(metrics.router)

    return app


app = create_app()


def run():
    """Serve the application with uvicorn"""
    import uvicorn

    settings = get_settings()
    logger.info(f"Listening on {settings.api_host}:{settings.api_port}")
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
