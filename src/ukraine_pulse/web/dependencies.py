# ABOUTME: FastAPI dependency injection for the news service and focus controllers.
# ABOUTME: Provides reusable dependencies for route handlers.

from typing import Annotated
from uuid import uuid4

from fastapi import Depends, HTTPException, Request, Response
from fastapi.templating import Jinja2Templates

from ukraine_pulse.ai.errors import NotConfigured
from ukraine_pulse.ai.service import NewsService
from ukraine_pulse.focus import FocusController, FocusRegistry

FOCUS_COOKIE = "focus_session"


def get_templates(request: Request) -> Jinja2Templates:
    """Get Jinja2 templates from app state."""
    return request.app.state.templates


Templates = Annotated[Jinja2Templates, Depends(get_templates)]


def get_news_service(request: Request) -> NewsService | NotConfigured:
    """Get the news service built at startup, or NotConfigured."""
    return request.app.state.news_service


NewsSvc = Annotated[NewsService | NotConfigured, Depends(get_news_service)]


def require_news_service(service: NewsSvc) -> NewsService:
    """Get the news service, answering 503 when the API key is missing."""
    if isinstance(service, NotConfigured):
        raise HTTPException(status_code=503, detail=service.message)
    return service


ConfiguredNewsSvc = Annotated[NewsService, Depends(require_news_service)]


def get_focus_registry(request: Request) -> FocusRegistry | None:
    """Get the per-visitor focus registry (None when not configured)."""
    return request.app.state.focus_registry


def get_focus_controller(
    request: Request,
    response: Response,
    _service: ConfiguredNewsSvc,
) -> FocusController:
    """Get the visitor's focus controller, issuing a session cookie if needed."""
    registry: FocusRegistry = request.app.state.focus_registry
    session_id = request.cookies.get(FOCUS_COOKIE) or uuid4().hex
    response.set_cookie(FOCUS_COOKIE, session_id, httponly=True, samesite="lax")
    return registry.get(session_id)


FocusCtrl = Annotated[FocusController, Depends(get_focus_controller)]
