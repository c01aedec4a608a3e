# ABOUTME: Google Gemini service for news summary generation.
# ABOUTME: Fetches topic summaries, leaning focus summaries and coverage stats with per-topic error isolation.

import asyncio
import base64
from collections.abc import Iterable
from datetime import datetime
from typing import Any

import structlog
from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import TypeAdapter
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ukraine_pulse.ai.errors import (
    COVERAGE_SAFETY_MESSAGE,
    EMPTY_SUMMARY_MESSAGE,
    FOCUS_SAFETY_MESSAGE,
    SUMMARY_SAFETY_MESSAGE,
    EmptyResponseError,
    NotConfigured,
    SafetyBlockedError,
    is_safety_error,
)
from ukraine_pulse.ai.parser import extract_sources, parse_summary_response, strip_markdown_fences
from ukraine_pulse.ai.prompts import (
    COVERAGE_STATS_PROMPT,
    COVERAGE_TIMELINE_PROMPT,
    IMAGE_PROMPT_SUFFIX,
    build_focus_prompt,
    build_summary_prompt,
)
from ukraine_pulse.config import Settings
from ukraine_pulse.models import (
    CoverageStats,
    Leaning,
    SummariesResult,
    SummaryData,
    TimelineDataPoint,
)

log = structlog.get_logger()

IMAGE_CREDIT = "AI-generated artistic representation of the news."
NO_SUMMARIES_MESSAGE = "Failed to load any news summaries."

_timeline_adapter = TypeAdapter(list[TimelineDataPoint])


def _log_retry(retry_state: Any) -> None:
    log.warning(
        "api_retry",
        attempt=retry_state.attempt_number,
        wait=retry_state.next_action.sleep if retry_state.next_action else None,
    )


def _search_config() -> types.GenerateContentConfig:
    """Generation config with Google Search grounding enabled."""
    return types.GenerateContentConfig(
        tools=[types.Tool(google_search=types.GoogleSearch())],
    )


def _json_config(schema: dict[str, Any]) -> types.GenerateContentConfig:
    """Generation config for structured JSON output."""
    return types.GenerateContentConfig(
        response_mime_type="application/json",
        response_json_schema=schema,
    )


class NewsService:
    """Generates news summaries through an injected Gemini client."""

    def __init__(self, client: genai.Client, settings: Settings) -> None:
        self.client = client
        self.settings = settings

    async def _generate(
        self,
        prompt: str,
        config: types.GenerateContentConfig,
    ) -> types.GenerateContentResponse:
        """Call the text model, retrying only transient server errors."""
        log.debug(
            "generating_content",
            model=self.settings.gemini_model,
            prompt_length=len(prompt),
        )
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(genai_errors.ServerError),
            stop=stop_after_attempt(self.settings.ai_max_attempts),
            wait=wait_exponential(multiplier=1, min=2, max=30),
            before_sleep=_log_retry,
            reraise=True,
        ):
            with attempt:
                response = await self.client.aio.models.generate_content(
                    model=self.settings.gemini_model,
                    contents=prompt,
                    config=config,
                )
        return response

    async def _generate_image(self, image_prompt: str, topic: str) -> str | None:
        """Generate an illustration and return it as a data URL.

        Best effort: any failure is logged and results in no image.
        """
        try:
            response = await self.client.aio.models.generate_images(
                model=self.settings.imagen_model,
                prompt=f"{image_prompt}{IMAGE_PROMPT_SUFFIX}",
                config=types.GenerateImagesConfig(
                    number_of_images=1,
                    output_mime_type="image/jpeg",
                    aspect_ratio="16:9",
                ),
            )
            if not response.generated_images:
                log.info("image_generation_empty", topic=topic)
                return None
            image_bytes = response.generated_images[0].image.image_bytes
            encoded = base64.b64encode(image_bytes).decode("ascii")
            return f"data:image/jpeg;base64,{encoded}"
        except Exception as e:
            log.error("image_generation_failed", topic=topic, error=str(e))
            return None

    async def fetch_summary(self, topic: str) -> SummaryData:
        """Generate, parse and illustrate the summary for one topic.

        Raises:
            EmptyResponseError: The model returned no text.
            SafetyBlockedError: The request was rejected by the safety filter.
        """
        log.info("fetching_summary", topic=topic)
        try:
            response = await self._generate(build_summary_prompt(topic), _search_config())

            combined_text = response.text
            if not combined_text:
                raise EmptyResponseError(EMPTY_SUMMARY_MESSAGE)

            parsed = parse_summary_response(combined_text, topic)

            image_url = None
            if parsed.image_prompt and self.settings.generate_images:
                image_url = await self._generate_image(parsed.image_prompt, topic)

            summary = SummaryData(
                topic=topic,
                summary=parsed.summary,
                sources=extract_sources(response),
                timestamp=datetime.now().strftime(self.settings.timestamp_format),
                image_url=image_url,
                image_credit=IMAGE_CREDIT if image_url else None,
                pull_quote=parsed.pull_quote,
                highlights=parsed.highlights,
            )
        except Exception as e:
            log.error("summary_fetch_error", topic=topic, error=str(e))
            if is_safety_error(e) and not isinstance(e, SafetyBlockedError):
                raise SafetyBlockedError(SUMMARY_SAFETY_MESSAGE) from e
            raise

        log.info(
            "summary_fetched",
            topic=topic,
            sources=len(summary.sources),
            highlights=len(summary.highlights),
            has_image=summary.image_url is not None,
        )
        return summary

    async def fetch_all_summaries(self, topics: Iterable[str] | None = None) -> SummariesResult:
        """Fetch every topic concurrently and aggregate the outcomes.

        A failing topic never prevents the others from being returned. A
        page-level error is set only when no topic succeeded and at least one
        failed; it carries the first failure's message.
        """
        topics = list(self.settings.topics if topics is None else topics)
        results = await asyncio.gather(
            *(self.fetch_summary(topic) for topic in topics),
            return_exceptions=True,
        )

        summaries: list[SummaryData] = []
        failures: list[BaseException] = []
        for topic, result in zip(topics, results, strict=True):
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, BaseException):
                log.error("topic_fetch_failed", topic=topic, error=str(result))
                failures.append(result)
            else:
                summaries.append(result)

        if failures:
            log.warning("summaries_partially_failed", failed=len(failures), total=len(topics))

        error = None
        if not summaries and failures:
            error = str(failures[0]) or NO_SUMMARIES_MESSAGE

        return SummariesResult(summaries=summaries, error=error)

    async def fetch_focus_summary(self, leaning: Leaning) -> str:
        """Summarize what the outlets of one leaning are currently emphasizing.

        Raises:
            EmptyResponseError: The model returned no text.
            SafetyBlockedError: The request was rejected by the safety filter.
        """
        log.info("fetching_focus_summary", leaning=leaning.value)
        try:
            response = await self._generate(build_focus_prompt(leaning), _search_config())
            text = response.text
            if not text:
                raise EmptyResponseError(
                    f"The AI returned an empty summary for {leaning.value} focus."
                )
            return text.strip()
        except Exception as e:
            log.error("focus_summary_error", leaning=leaning.value, error=str(e))
            if is_safety_error(e) and not isinstance(e, SafetyBlockedError):
                raise SafetyBlockedError(FOCUS_SAFETY_MESSAGE) from e
            raise

    async def _generate_json(self, prompt: str, schema: dict[str, Any]) -> str:
        try:
            response = await self._generate(prompt, _json_config(schema))
        except Exception as e:
            if is_safety_error(e):
                raise SafetyBlockedError(COVERAGE_SAFETY_MESSAGE) from e
            raise
        if not response.text:
            raise EmptyResponseError("The AI returned no coverage data.")
        return strip_markdown_fences(response.text)

    async def fetch_coverage_stats(self) -> CoverageStats:
        """Estimate the current US/EU coverage share.

        Raises:
            ValueError: The response was not valid coverage JSON.
        """
        text = await self._generate_json(COVERAGE_STATS_PROMPT, CoverageStats.model_json_schema())
        stats = CoverageStats.model_validate_json(text)
        log.info("coverage_stats_fetched", us=stats.us, eu=stats.eu)
        return stats

    async def fetch_coverage_timeline(self) -> list[TimelineDataPoint]:
        """Estimate the monthly US/EU coverage share over the last year."""
        text = await self._generate_json(COVERAGE_TIMELINE_PROMPT, _timeline_adapter.json_schema())
        points = _timeline_adapter.validate_json(text)
        log.info("coverage_timeline_fetched", points=len(points))
        return points


def build_news_service(settings: Settings) -> NewsService | NotConfigured:
    """Construct the service once at startup.

    Returns NotConfigured instead of raising when no API key is set.
    """
    if not settings.is_configured:
        log.warning("gemini_not_configured")
        return NotConfigured()
    client = genai.Client(api_key=settings.gemini_api_key.get_secret_value())
    return NewsService(client, settings)
