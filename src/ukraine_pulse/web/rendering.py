# ABOUTME: HTML rendering helpers for summary text.
# ABOUTME: Marks perspective highlights and search terms while escaping all model output.

import re

from markupsafe import Markup, escape

from ukraine_pulse.models import Highlight, SummaryData

PERSPECTIVE_MARK = Markup(
    '<mark class="perspective" tabindex="0" '
    'data-left="{left}" data-center="{center}" data-right="{right}">{text}</mark>'
)
SEARCH_MARK = Markup('<mark class="search">{}</mark>')


def split_paragraphs(text: str) -> list[str]:
    """Split text on newlines, dropping blank lines."""
    return [p for p in text.split("\n") if p.strip()]


def brief_summary(data: SummaryData) -> str:
    """Short teaser for a summary card: the pull quote, or the first sentence."""
    if data.pull_quote:
        return data.pull_quote
    return data.summary.split(".")[0] + "."


def matches_search(data: SummaryData, term: str) -> bool:
    """Case-insensitive keyword match against a summary's visible text."""
    term = term.strip().lower()
    if not term:
        return True
    haystack = " ".join(filter(None, [data.topic, data.summary, data.pull_quote])).lower()
    return term in haystack


def mark_search_term(text: str, term: str) -> Markup:
    """Escape text and wrap case-insensitive matches of term in a search mark."""
    term = term.strip()
    if not term:
        return escape(text)

    parts = re.split(f"({re.escape(term)})", text, flags=re.IGNORECASE)
    # Odd indexes hold the captured matches.
    return Markup("").join(
        SEARCH_MARK.format(part) if i % 2 else escape(part) for i, part in enumerate(parts)
    )


def _render_paragraph(paragraph: str, highlights: list[Highlight], term: str) -> Markup:
    present = [h for h in highlights if h.text_to_highlight and h.text_to_highlight in paragraph]
    if not present:
        return Markup("<p>{}</p>").format(mark_search_term(paragraph, term))

    by_text: dict[str, Highlight] = {}
    for h in present:
        by_text.setdefault(h.text_to_highlight, h)

    pattern = re.compile("(" + "|".join(re.escape(text) for text in by_text) + ")")
    pieces = []
    for part in pattern.split(paragraph):
        highlight = by_text.get(part)
        if highlight is None:
            pieces.append(mark_search_term(part, term))
            continue
        pieces.append(
            PERSPECTIVE_MARK.format(
                left=highlight.perspectives.left,
                center=highlight.perspectives.center,
                right=highlight.perspectives.right,
                text=mark_search_term(part, term),
            )
        )
    return Markup("<p>{}</p>").format(Markup("").join(pieces))


def render_summary(data: SummaryData, term: str = "") -> Markup:
    """Render a summary as paragraphs with perspective highlights and search marks."""
    return Markup("\n").join(
        _render_paragraph(p, data.highlights, term) for p in split_paragraphs(data.summary)
    )
