# ABOUTME: Static editorial configuration for the news summaries.
# ABOUTME: Outlets grouped by political leaning and the topics shown on the front page.

from ukraine_pulse.models import Leaning

NEWS_OUTLETS: dict[Leaning, list[str]] = {
    Leaning.LEFT: [
        "The New York Times",
        "The Guardian",
        "CNN",
        "MSNBC",
        "The Washington Post",
        "Reuters",
    ],
    Leaning.RIGHT: [
        "Fox News",
        "The Wall Street Journal",
        "New York Post",
        "The Times (UK)",
        "The National Review",
        "The Telegraph",
    ],
    Leaning.CENTER: [
        "Associated Press",
        "BBC News",
        "NPR",
    ],
}

TOPICS: list[str] = [
    "Ukraine Frontline Developments",
    "US Politics & Aid for Ukraine",
    "Russian Domestic Affairs & War Impact",
    "Global Diplomacy & Ukraine",
    "Israel-Gaza Conflict & Global Tensions",
]
