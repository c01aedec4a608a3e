# ABOUTME: Coverage stats API routes for the US/EU coverage chart and timeline.
# ABOUTME: Failures are reported as 502 for the calling chart only.

import structlog
from fastapi import APIRouter, HTTPException

from ukraine_pulse.models import CoverageStats, TimelineDataPoint
from ukraine_pulse.web.dependencies import ConfiguredNewsSvc

router = APIRouter(prefix="/api/coverage", tags=["coverage"])
log = structlog.get_logger()


@router.get("", response_model=CoverageStats)
async def coverage_stats(service: ConfiguredNewsSvc):
    """Current share of US and EU media coverage devoted to the war."""
    try:
        return await service.fetch_coverage_stats()
    except Exception as e:
        log.error("coverage_stats_failed", error=str(e))
        raise HTTPException(
            status_code=502, detail=str(e) or "Could not load coverage stats."
        ) from e


@router.get("/timeline", response_model=list[TimelineDataPoint])
async def coverage_timeline(service: ConfiguredNewsSvc):
    """Monthly US/EU coverage share over the last year."""
    try:
        return await service.fetch_coverage_timeline()
    except Exception as e:
        log.error("coverage_timeline_failed", error=str(e))
        raise HTTPException(
            status_code=502, detail=str(e) or "Could not load timeline data."
        ) from e
