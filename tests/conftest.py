# ABOUTME: Pytest fixtures and configuration for Ukraine Pulse tests.
# ABOUTME: Provides mock settings, fake Gemini responses, sample summaries and a mocked news service.

import json
from collections.abc import Callable
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import SecretStr

from ukraine_pulse.ai.prompts import (
    IMAGE_PROMPT_SEPARATOR,
    PERSPECTIVES_JSON_SEPARATOR,
    PULL_QUOTE_SEPARATOR,
)
from ukraine_pulse.config import Settings
from ukraine_pulse.models import (
    CoverageStats,
    Highlight,
    Perspective,
    Source,
    SummariesResult,
    SummaryData,
)

TEST_TOPICS = ["Frontline", "Diplomacy", "Aid", "Economy", "Energy"]


def _build_response(text: str | None, chunks: list[tuple[str, str]] | None = None) -> MagicMock:
    """Build a fake GenerateContentResponse with grounding chunks of (uri, title)."""
    response = MagicMock()
    response.text = text
    candidate = MagicMock()
    candidate.grounding_metadata.grounding_chunks = [
        SimpleNamespace(web=SimpleNamespace(uri=uri, title=title)) for uri, title in chunks or []
    ]
    response.candidates = [candidate]
    return response


def _build_summary_text(
    summary: str = "Fighting continued near Kharkiv.\nTalks stalled in Geneva.",
    quote: str = "Fighting continued near Kharkiv.",
    image_prompt: str = "A quiet frontline trench at dawn",
    highlights: list[Highlight] | None = None,
) -> str:
    """Build a raw model response in the separator format."""
    highlights = highlights if highlights is not None else []
    payload = json.dumps([h.model_dump(by_alias=True) for h in highlights])
    return (
        f"{summary}\n{PULL_QUOTE_SEPARATOR}\n{quote}\n{IMAGE_PROMPT_SEPARATOR}\n"
        f"{image_prompt}\n{PERSPECTIVES_JSON_SEPARATOR}\n{payload}"
    )


@pytest.fixture
def make_response() -> Callable[..., MagicMock]:
    """Factory for fake GenerateContentResponse objects."""
    return _build_response


@pytest.fixture
def make_summary_text() -> Callable[..., str]:
    """Factory for raw model responses in the separator format."""
    return _build_summary_text


@pytest.fixture
def mock_settings() -> Settings:
    """Create mock settings for testing."""
    return Settings(
        _env_file=None,
        gemini_api_key=SecretStr("test-key"),
        gemini_model="gemini-test",
        imagen_model="imagen-test",
        generate_images=True,
        ai_max_attempts=1,
        topics=list(TEST_TOPICS),
        focus_session_capacity=4,
        log_level="DEBUG",
    )


@pytest.fixture
def sample_highlight() -> Highlight:
    """Create a sample Highlight for testing."""
    return Highlight(
        text_to_highlight="Talks stalled",
        perspectives=Perspective(
            left="Stresses the humanitarian cost of delay.",
            center="Reports the positions of both delegations.",
            right="Questions whether talks serve national interests.",
        ),
    )


@pytest.fixture
def sample_summary(sample_highlight: Highlight) -> SummaryData:
    """Create a sample SummaryData for testing."""
    return SummaryData(
        topic="Frontline",
        summary="Fighting continued near Kharkiv.\nTalks stalled in Geneva.",
        sources=[Source(uri="https://example.com/a", title="Example A")],
        timestamp="10/17/2026, 09:00:00 AM",
        pull_quote="Fighting continued near Kharkiv.",
        highlights=[sample_highlight],
    )


@pytest.fixture
def mock_genai_client() -> MagicMock:
    """Create a mock Google GenAI client with async model calls."""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(
        return_value=_build_response(_build_summary_text(), [("https://example.com/a", "A")])
    )
    image = MagicMock()
    image.image.image_bytes = b"abc"
    client.aio.models.generate_images = AsyncMock(
        return_value=MagicMock(generated_images=[image])
    )
    return client


@pytest.fixture
def mock_news_service(sample_summary: SummaryData) -> MagicMock:
    """Create a mock NewsService with successful async methods."""
    service = MagicMock()
    service.fetch_all_summaries = AsyncMock(
        return_value=SummariesResult(summaries=[sample_summary])
    )
    service.fetch_focus_summary = AsyncMock(return_value="Left outlets focus on aid.")
    service.fetch_coverage_stats = AsyncMock(return_value=CoverageStats(us=42, eu=67))
    service.fetch_coverage_timeline = AsyncMock(return_value=[])
    return service
