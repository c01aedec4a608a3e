# ABOUTME: JSON API routes for summaries and health checks.
# ABOUTME: Exposes the aggregated topic summaries to script clients.

import structlog
from fastapi import APIRouter
from pydantic import BaseModel

from ukraine_pulse.ai.errors import NotConfigured
from ukraine_pulse.models import SummariesResult
from ukraine_pulse.web.dependencies import ConfiguredNewsSvc, NewsSvc

router = APIRouter(prefix="/api", tags=["api"])
log = structlog.get_logger()


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    configured: bool
    version: str = "0.1.0"


@router.get("/health", response_model=HealthResponse)
async def health_check(service: NewsSvc):
    """Health check endpoint, reporting whether the API key is configured."""
    return HealthResponse(status="healthy", configured=not isinstance(service, NotConfigured))


@router.get("/summaries", response_model=SummariesResult)
async def summaries(service: ConfiguredNewsSvc):
    """Fetch all topic summaries; partial failures are dropped, total failure sets error."""
    result = await service.fetch_all_summaries()
    log.info("api_summaries", count=len(result.summaries), error=result.error)
    return result
