# ABOUTME: Media-focus API routes backed by the visitor's focus controller.
# ABOUTME: Selecting the active leaning again toggles the panel back to idle.

import structlog
from fastapi import APIRouter
from pydantic import BaseModel

from ukraine_pulse.focus import FocusController
from ukraine_pulse.models import Failure, Leaning, Success
from ukraine_pulse.web.dependencies import FocusCtrl

router = APIRouter(prefix="/api/focus", tags=["focus"])
log = structlog.get_logger()


class FocusResponse(BaseModel):
    """Focus panel state for one visitor."""

    leaning: Leaning | None
    status: str
    summary: str | None = None
    message: str | None = None


def _to_response(controller: FocusController) -> FocusResponse:
    state = controller.state
    return FocusResponse(
        leaning=controller.leaning,
        status=state.status,
        summary=state.data if isinstance(state, Success) else None,
        message=state.message if isinstance(state, Failure) else None,
    )


@router.get("", response_model=FocusResponse)
async def get_focus(controller: FocusCtrl):
    """Current focus panel state."""
    return _to_response(controller)


@router.post("/{leaning}", response_model=FocusResponse)
async def select_focus(leaning: Leaning, controller: FocusCtrl):
    """Select a leaning and return its focus summary, or close it if already active."""
    await controller.select(leaning)
    response = _to_response(controller)
    log.info("focus_selected", leaning=leaning.value, status=response.status)
    return response


@router.delete("", response_model=FocusResponse)
async def close_focus(controller: FocusCtrl):
    """Close the focus panel."""
    controller.close()
    return _to_response(controller)
