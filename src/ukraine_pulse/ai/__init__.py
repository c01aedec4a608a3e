# ABOUTME: AI integration module for Google Gemini.
# ABOUTME: Provides prompt building, response parsing and the news summary service.

from ukraine_pulse.ai.errors import (
    EmptyResponseError,
    NewsServiceError,
    NotConfigured,
    SafetyBlockedError,
)
from ukraine_pulse.ai.service import NewsService, build_news_service

__all__ = [
    "EmptyResponseError",
    "NewsService",
    "NewsServiceError",
    "NotConfigured",
    "SafetyBlockedError",
    "build_news_service",
]
