# ABOUTME: Home route displaying the topic summaries.
# ABOUTME: Fetches summaries and coverage stats concurrently, each rendered from its own region state.

import asyncio

import structlog
from fastapi import APIRouter, Query, Request
from fastapi.responses import HTMLResponse

from ukraine_pulse.ai.errors import NotConfigured
from ukraine_pulse.ai.service import NewsService
from ukraine_pulse.focus import FocusState
from ukraine_pulse.models import CoverageStats, Failure, Idle, RegionState, Success
from ukraine_pulse.web.dependencies import FOCUS_COOKIE, NewsSvc, Templates, get_focus_registry
from ukraine_pulse.web.rendering import matches_search

router = APIRouter()
log = structlog.get_logger()

COVERAGE_ERROR_MESSAGE = "Could not load coverage stats."
SUMMARIES_ERROR_MESSAGE = (
    "An unexpected error occurred while loading news. Please try refreshing the page."
)


async def _load_summaries(service: NewsService) -> RegionState:
    try:
        result = await service.fetch_all_summaries()
    except Exception as e:
        log.exception("summaries_load_failed")
        return Failure(message=str(e) or SUMMARIES_ERROR_MESSAGE)
    if result.error:
        return Failure(message=result.error)
    return Success(data=result.summaries)


async def _load_coverage(service: NewsService) -> Success[CoverageStats] | Failure:
    try:
        stats = await service.fetch_coverage_stats()
    except Exception as e:
        log.error("coverage_load_failed", error=str(e))
        return Failure(message=str(e) or COVERAGE_ERROR_MESSAGE)
    return Success[CoverageStats](data=stats)


def _current_focus(request: Request) -> tuple[FocusState, str | None]:
    registry = get_focus_registry(request)
    session_id = request.cookies.get(FOCUS_COOKIE)
    if registry is None or session_id is None or session_id not in registry:
        return Idle(), None
    controller = registry.get(session_id)
    return controller.state, controller.leaning.value if controller.leaning else None


@router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    templates: Templates,
    service: NewsSvc,
    q: str = Query("", description="Keyword to filter and highlight summaries"),
):
    """Display every topic summary with the focus panel and coverage chart."""
    if isinstance(service, NotConfigured):
        return templates.TemplateResponse(
            request=request,
            name="home.html",
            context={"not_configured": service.message, "query": q},
            status_code=503,
        )

    summaries_state, coverage_state = await asyncio.gather(
        _load_summaries(service),
        _load_coverage(service),
    )

    visible = []
    if isinstance(summaries_state, Success):
        visible = [s for s in summaries_state.data if matches_search(s, q)]

    focus_state, focus_leaning = _current_focus(request)

    return templates.TemplateResponse(
        request=request,
        name="home.html",
        context={
            "summaries_state": summaries_state,
            "summaries": visible,
            "coverage_state": coverage_state,
            "focus_state": focus_state,
            "focus_leaning": focus_leaning,
            "query": q,
        },
    )
