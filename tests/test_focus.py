# ABOUTME: Tests for the media-focus state machine and per-visitor registry.
# ABOUTME: Covers toggle-off, failures, superseded requests and LRU eviction.

import asyncio
from unittest.mock import AsyncMock

import pytest

from ukraine_pulse.focus import UNKNOWN_ERROR_MESSAGE, FocusController, FocusRegistry
from ukraine_pulse.models import Failure, Idle, Leaning, Loading, Success


class TestFocusController:
    """Tests for FocusController transitions."""

    def test_starts_idle(self) -> None:
        controller = FocusController(AsyncMock())
        assert isinstance(controller.state, Idle)
        assert controller.leaning is None

    @pytest.mark.asyncio
    async def test_select_success(self) -> None:
        fetch = AsyncMock(return_value="Center outlets focus on talks.")
        controller = FocusController(fetch)

        state = await controller.select(Leaning.CENTER)

        assert isinstance(state, Success)
        assert state.data == "Center outlets focus on talks."
        assert controller.leaning is Leaning.CENTER
        fetch.assert_awaited_once_with(Leaning.CENTER)

    @pytest.mark.asyncio
    async def test_select_failure(self) -> None:
        controller = FocusController(AsyncMock(side_effect=RuntimeError("quota exceeded")))

        state = await controller.select(Leaning.LEFT)

        assert isinstance(state, Failure)
        assert state.message == "quota exceeded"
        assert controller.leaning is Leaning.LEFT

    @pytest.mark.asyncio
    async def test_failure_without_message(self) -> None:
        controller = FocusController(AsyncMock(side_effect=RuntimeError()))

        state = await controller.select(Leaning.LEFT)

        assert state == Failure(message=UNKNOWN_ERROR_MESSAGE)

    @pytest.mark.asyncio
    async def test_reselect_active_leaning_toggles_off(self) -> None:
        """Selecting the loaded leaning again returns to idle without a new request."""
        fetch = AsyncMock(return_value="text")
        controller = FocusController(fetch)
        await controller.select(Leaning.CENTER)

        state = await controller.select(Leaning.CENTER)

        assert isinstance(state, Idle)
        assert controller.leaning is None
        assert fetch.await_count == 1

    @pytest.mark.asyncio
    async def test_reselect_after_error_toggles_off(self) -> None:
        fetch = AsyncMock(side_effect=RuntimeError("boom"))
        controller = FocusController(fetch)
        await controller.select(Leaning.RIGHT)

        state = await controller.select(Leaning.RIGHT)

        assert isinstance(state, Idle)
        assert fetch.await_count == 1

    @pytest.mark.asyncio
    async def test_select_other_leaning_fetches_again(self) -> None:
        fetch = AsyncMock(side_effect=lambda leaning: f"{leaning.value} text")
        controller = FocusController(fetch)
        await controller.select(Leaning.LEFT)

        state = await controller.select(Leaning.RIGHT)

        assert state == Success[str](data="Right-Leaning text")
        assert fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_superseded_request_is_cancelled(self) -> None:
        """A slow earlier selection must not overwrite a newer one."""
        started = asyncio.Event()
        release = asyncio.Event()
        cancelled = asyncio.Event()

        async def fetch(leaning: Leaning) -> str:
            if leaning is Leaning.LEFT:
                started.set()
                try:
                    await release.wait()
                except asyncio.CancelledError:
                    cancelled.set()
                    raise
                return "stale"
            return "fresh"

        controller = FocusController(fetch)
        first = asyncio.create_task(controller.select(Leaning.LEFT))
        await started.wait()
        assert isinstance(controller.state, Loading)

        state = await controller.select(Leaning.RIGHT)
        first_state = await first

        assert state == Success[str](data="fresh")
        assert first_state != Success[str](data="stale")
        assert controller.state == Success[str](data="fresh")
        assert controller.leaning is Leaning.RIGHT
        assert cancelled.is_set()

    @pytest.mark.asyncio
    async def test_close_while_loading(self) -> None:
        started = asyncio.Event()

        async def fetch(leaning: Leaning) -> str:
            started.set()
            await asyncio.Event().wait()
            return "never"

        controller = FocusController(fetch)
        pending = asyncio.create_task(controller.select(Leaning.CENTER))
        await started.wait()

        controller.close()
        result = await pending

        assert isinstance(result, Idle)
        assert isinstance(controller.state, Idle)
        assert controller.leaning is None

    @pytest.mark.asyncio
    async def test_cancelled_caller_resets_to_idle(self) -> None:
        """A cancelled select leaves the panel idle so the same leaning can fetch again."""
        started = asyncio.Event()
        calls = 0

        async def fetch(leaning: Leaning) -> str:
            nonlocal calls
            calls += 1
            if calls == 1:
                started.set()
                await asyncio.Event().wait()
            return "retried"

        controller = FocusController(fetch)
        pending = asyncio.create_task(controller.select(Leaning.LEFT))
        await started.wait()

        pending.cancel()
        with pytest.raises(asyncio.CancelledError):
            await pending

        assert isinstance(controller.state, Idle)
        assert controller.leaning is None

        state = await controller.select(Leaning.LEFT)

        assert state == Success[str](data="retried")
        assert calls == 2


class TestFocusRegistry:
    """Tests for FocusRegistry."""

    def test_same_session_same_controller(self) -> None:
        registry = FocusRegistry(AsyncMock(), capacity=2)

        assert registry.get("a") is registry.get("a")
        assert len(registry) == 1

    def test_evicts_least_recently_used(self) -> None:
        registry = FocusRegistry(AsyncMock(), capacity=2)
        registry.get("a")
        registry.get("b")
        registry.get("a")

        registry.get("c")

        assert "a" in registry
        assert "b" not in registry
        assert "c" in registry
        assert len(registry) == 2
