# ABOUTME: FastAPI application factory with Jinja2 templates and the news service.
# ABOUTME: Main entry point for the Ukraine Pulse web frontend.

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from ukraine_pulse.ai.errors import NotConfigured
from ukraine_pulse.ai.service import NewsService, build_news_service
from ukraine_pulse.config import Settings, get_settings
from ukraine_pulse.focus import FocusRegistry
from ukraine_pulse.models import Leaning
from ukraine_pulse.web.rendering import (
    brief_summary,
    mark_search_term,
    render_summary,
    split_paragraphs,
)
from ukraine_pulse.web.routes import api, coverage, focus, home

logger = structlog.get_logger()

# Template and static paths
WEB_DIR = Path(__file__).parent
TEMPLATES_DIR = WEB_DIR / "templates"
STATIC_DIR = WEB_DIR / "static"


def format_percentage(value: float | None) -> str:
    """Format a 0-100 share for display."""
    if value is None:
        return ""
    return f"{value:.0f}%"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan context, logging the configuration state."""
    logger.info(
        "app_startup",
        configured=not isinstance(app.state.news_service, NotConfigured),
    )
    yield
    logger.info("app_shutdown")


def create_app(
    settings: Settings | None = None,
    service: NewsService | NotConfigured | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    The news service is built once here from the API key; pass one in to
    override it (tests, alternative clients).
    """
    settings = settings or get_settings()
    if service is None:
        service = build_news_service(settings)

    app = FastAPI(
        title="Ukraine Pulse",
        description="AI-generated news summaries about the war in Ukraine",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.news_service = service
    app.state.focus_registry = (
        None
        if isinstance(service, NotConfigured)
        else FocusRegistry(service.fetch_focus_summary, settings.focus_session_capacity)
    )

    # Configure templates with custom filters
    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    templates.env.filters["brief"] = brief_summary
    templates.env.filters["paragraphs"] = split_paragraphs
    templates.env.filters["render_summary"] = render_summary
    templates.env.filters["mark_search"] = mark_search_term
    templates.env.filters["percentage"] = format_percentage
    templates.env.globals["leanings"] = list(Leaning)
    app.state.templates = templates

    # Mount static files
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    # Include routers
    app.include_router(home.router)
    app.include_router(api.router)
    app.include_router(focus.router)
    app.include_router(coverage.router)

    return app


# Application instance for uvicorn
app = create_app()
