# ABOUTME: Main package for Ukraine Pulse news summaries.
# ABOUTME: Exports configuration and the core summary data models.

from ukraine_pulse.config import get_settings
from ukraine_pulse.models import Highlight, Leaning, Source, SummariesResult, SummaryData

__all__ = [
    "get_settings",
    "Highlight",
    "Leaning",
    "Source",
    "SummariesResult",
    "SummaryData",
]
