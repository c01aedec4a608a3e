# ABOUTME: State machine for the media-focus panel.
# ABOUTME: Tracks idle/loading/success/error per visitor and cancels superseded focus requests.

import asyncio
from collections import OrderedDict
from collections.abc import Awaitable, Callable

import structlog

from ukraine_pulse.models import Failure, Idle, Leaning, Loading, Success

log = structlog.get_logger()

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."

FocusState = Idle | Loading | Success[str] | Failure
FocusFetcher = Callable[[Leaning], Awaitable[str]]


class FocusController:
    """Drives one focus panel: Idle -> Loading -> Success | Failure.

    Selecting the active leaning again closes the panel without a request.
    Selecting a different leaning while a request is pending cancels it, so a
    stale response can never overwrite the newer selection.
    """

    def __init__(self, fetch: FocusFetcher) -> None:
        self._fetch = fetch
        self._leaning: Leaning | None = None
        self._state: FocusState = Idle()
        self._task: asyncio.Future[str] | None = None

    @property
    def leaning(self) -> Leaning | None:
        return self._leaning

    @property
    def state(self) -> FocusState:
        return self._state

    def _cancel_pending(self) -> None:
        if self._task is not None and not self._task.done():
            log.info("focus_request_superseded", leaning=self._leaning)
            self._task.cancel()
        self._task = None

    def close(self) -> FocusState:
        """Return to Idle, abandoning any pending request."""
        self._cancel_pending()
        self._leaning = None
        self._state = Idle()
        return self._state

    async def select(self, leaning: Leaning) -> FocusState:
        """Select a leaning and wait for its focus summary.

        Returns the state after the request settles, or the current state if
        this request was superseded by a newer selection.
        """
        if leaning == self._leaning and not isinstance(self._state, Idle):
            log.info("focus_toggled_off", leaning=leaning.value)
            return self.close()

        self._cancel_pending()
        self._leaning = leaning
        self._state = Loading()
        task = asyncio.ensure_future(self._fetch(leaning))
        self._task = task

        try:
            text = await task
        except asyncio.CancelledError:
            if self._task is not task:
                return self._state
            # The caller itself was cancelled; leave no dangling Loading state.
            task.cancel()
            self._task = None
            self._leaning = None
            self._state = Idle()
            raise
        except Exception as e:
            if self._task is task:
                self._state = Failure(message=str(e) or UNKNOWN_ERROR_MESSAGE)
                self._task = None
            return self._state

        if self._task is task:
            self._state = Success[str](data=text)
            self._task = None
        return self._state


class FocusRegistry:
    """Per-visitor focus controllers, evicting the least recently used."""

    def __init__(self, fetch: FocusFetcher, capacity: int = 256) -> None:
        self._fetch = fetch
        self._capacity = capacity
        self._controllers: OrderedDict[str, FocusController] = OrderedDict()

    def __len__(self) -> int:
        return len(self._controllers)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._controllers

    def get(self, session_id: str) -> FocusController:
        """Get the controller for a visitor, creating it if needed."""
        controller = self._controllers.get(session_id)
        if controller is not None:
            self._controllers.move_to_end(session_id)
            return controller

        controller = FocusController(self._fetch)
        self._controllers[session_id] = controller
        while len(self._controllers) > self._capacity:
            _, evicted = self._controllers.popitem(last=False)
            evicted.close()
        return controller
