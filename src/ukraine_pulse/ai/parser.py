# ABOUTME: Parsing of raw Gemini responses into structured summary parts.
# ABOUTME: Splits on the prompt separators, decodes highlight JSON and collects grounding sources.

import json
import re
from typing import Any

import structlog
from pydantic import TypeAdapter, ValidationError

from ukraine_pulse.ai.prompts import (
    IMAGE_PROMPT_SEPARATOR,
    PERSPECTIVES_JSON_SEPARATOR,
    PULL_QUOTE_SEPARATOR,
)
from ukraine_pulse.models import Highlight, ParsedResponse, Source

log = structlog.get_logger()

UNTITLED_SOURCE = "Untitled Source"

_highlight_adapter = TypeAdapter(Highlight)
_fence_pattern = re.compile(r"^```(?:json)?\s*\n?(.*?)\n?```$", re.DOTALL)


def strip_markdown_fences(text: str) -> str:
    """Remove a ```json ... ``` wrapper, which Gemini sometimes adds around JSON."""
    match = _fence_pattern.match(text.strip())
    if match:
        return match.group(1).strip()
    return text.strip()


def _none_if_empty(value: str | None) -> str | None:
    return value or None


def parse_highlights(json_part: str, topic: str = "") -> list[Highlight]:
    """Decode the perspectives JSON segment.

    Undecodable JSON or a non-list payload is logged and yields an empty list.
    Invalid entries in a list are logged and skipped; valid ones are kept.
    """
    try:
        data = json.loads(strip_markdown_fences(json_part))
    except (ValueError, RecursionError) as e:
        log.warning(
            "highlights_parse_failed",
            topic=topic,
            error=str(e)[:200],
            json_preview=json_part[:200],
        )
        return []

    if not isinstance(data, list):
        log.warning(
            "highlights_parse_failed",
            topic=topic,
            error=f"expected a list, got {type(data).__name__}",
            json_preview=json_part[:200],
        )
        return []

    highlights: list[Highlight] = []
    for index, item in enumerate(data):
        try:
            highlights.append(_highlight_adapter.validate_python(item))
        except ValidationError as e:
            log.warning("highlight_skipped", topic=topic, index=index, error=str(e))
    return highlights


def parse_summary_response(text: str | None, topic: str = "") -> ParsedResponse:
    """Split a raw summary response into summary, pull quote, image prompt and highlights.

    When the pull quote or image prompt separator is missing, the whole text
    before the perspectives separator becomes the summary. Never raises.

    Args:
        text: Raw text returned by the generation call.
        topic: Topic name, used only for log context.

    Returns:
        ParsedResponse with trimmed pieces.
    """
    main_parts = (text or "").split(PERSPECTIVES_JSON_SEPARATOR)
    text_part = main_parts[0]
    json_part = main_parts[1] if len(main_parts) > 1 else None

    pull_quote: str | None = None
    image_prompt: str | None = None

    if IMAGE_PROMPT_SEPARATOR in text_part and PULL_QUOTE_SEPARATOR in text_part:
        image_parts = text_part.split(IMAGE_PROMPT_SEPARATOR)
        summary_and_quote = image_parts[0]
        image_prompt = _none_if_empty(image_parts[1].strip())

        quote_parts = summary_and_quote.split(PULL_QUOTE_SEPARATOR)
        summary = quote_parts[0].strip()
        if len(quote_parts) > 1:
            pull_quote = _none_if_empty(quote_parts[1].strip())
    else:
        log.warning("separators_missing", topic=topic)
        summary = text_part.strip()

    highlights = parse_highlights(json_part, topic) if json_part is not None else []

    return ParsedResponse(
        summary=summary,
        pull_quote=pull_quote,
        image_prompt=image_prompt,
        highlights=highlights,
    )


def extract_sources(response: Any) -> list[Source]:
    """Collect web citations from a response's grounding metadata.

    Entries without a URI are dropped and duplicates are removed by URI,
    keeping the first occurrence.
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []

    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []

    sources: list[Source] = []
    seen: set[str] = set()
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        uri = getattr(web, "uri", None) or ""
        if not uri or uri in seen:
            continue
        seen.add(uri)
        sources.append(Source(uri=uri, title=getattr(web, "title", None) or UNTITLED_SOURCE))

    return sources
