# ABOUTME: Error types for news generation failures.
# ABOUTME: Classifies missing credentials, empty responses and safety-filter rejections.

from dataclasses import dataclass

NOT_CONFIGURED_MESSAGE = (
    "The Google Gemini API client is not initialized. "
    "Please ensure the API key is configured correctly."
)
SUMMARY_SAFETY_MESSAGE = (
    "The request was blocked due to safety settings. Please try a different topic."
)
FOCUS_SAFETY_MESSAGE = "The request was blocked due to safety settings."
COVERAGE_SAFETY_MESSAGE = (
    "The coverage request was blocked due to safety settings. Please try again later."
)
EMPTY_SUMMARY_MESSAGE = (
    "The AI returned an empty summary. "
    "This might be due to content restrictions or lack of recent news."
)


@dataclass(frozen=True)
class NotConfigured:
    """Returned instead of a service when no API key is available."""

    message: str = NOT_CONFIGURED_MESSAGE


class NewsServiceError(Exception):
    """Base class for classified generation failures."""


class EmptyResponseError(NewsServiceError):
    """The provider returned no usable text."""


class SafetyBlockedError(NewsServiceError):
    """The provider's content filter rejected the request."""


def is_safety_error(error: BaseException) -> bool:
    """Check whether a provider error reports a safety-filter rejection."""
    return "SAFETY" in str(error)
