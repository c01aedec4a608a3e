# ABOUTME: Pydantic models for news summary data structures.
# ABOUTME: Defines summaries, sources, perspective highlights, coverage stats and region states.

from enum import Enum
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Leaning(str, Enum):
    """Editorial leaning of a group of news outlets."""

    LEFT = "Left-Leaning"
    CENTER = "Center"
    RIGHT = "Right-Leaning"

    @property
    def label(self) -> str:
        return self.value.replace("-", " ")


class CamelModel(BaseModel):
    """Base model serialising to the camelCase keys used by the JSON API."""

    model_config = ConfigDict(populate_by_name=True)


class Source(BaseModel):
    """Citation returned in the grounding metadata."""

    uri: str
    title: str


class Perspective(BaseModel):
    """How each leaning frames a highlighted passage."""

    left: str
    center: str
    right: str


class Highlight(CamelModel):
    """Span of summary text annotated with per-leaning framing."""

    text_to_highlight: str = Field(alias="textToHighlight")
    perspectives: Perspective


class ParsedResponse(BaseModel):
    """Structured pieces split out of a raw model response."""

    summary: str
    pull_quote: str | None = None
    image_prompt: str | None = None
    highlights: list[Highlight] = []


class SummaryData(CamelModel):
    """AI-generated summary for a single topic."""

    topic: str
    summary: str
    sources: list[Source] = []
    timestamp: str
    image_url: str | None = Field(default=None, alias="imageUrl")
    image_credit: str | None = Field(default=None, alias="imageCredit")
    pull_quote: str | None = Field(default=None, alias="pullQuote")
    highlights: list[Highlight] = []


class SummariesResult(BaseModel):
    """Outcome of fetching every topic: successful summaries plus a page-level error."""

    summaries: list[SummaryData]
    error: str | None = None


class CoverageStats(BaseModel):
    """Share of US and EU media coverage devoted to the war, in percent."""

    us: float = Field(ge=0, le=100)
    eu: float = Field(ge=0, le=100)


class TimelineDataPoint(BaseModel):
    """Coverage share for a single point in time."""

    date: str
    us: float = Field(ge=0, le=100)
    eu: float = Field(ge=0, le=100)


# --- Region state ---


class Idle(BaseModel):
    """Nothing requested yet, or the region was closed."""

    status: Literal["idle"] = "idle"


class Loading(BaseModel):
    """A request is in flight."""

    status: Literal["loading"] = "loading"


class Success(BaseModel, Generic[T]):
    """Request completed with data."""

    status: Literal["success"] = "success"
    data: T


class Failure(BaseModel):
    """Request failed; message is shown in the region."""

    status: Literal["error"] = "error"
    message: str


RegionState = Idle | Loading | Success | Failure
