# ABOUTME: Prompt templates for Gemini AI interactions.
# ABOUTME: Builds the topic summary, leaning focus and coverage prompts, and defines response separators.

from ukraine_pulse.constants import NEWS_OUTLETS
from ukraine_pulse.models import Leaning

# Literal markers between the parts of a summary response. The parser splits on these exact strings.
PULL_QUOTE_SEPARATOR = "|||---PULL_QUOTE---|||"
IMAGE_PROMPT_SEPARATOR = "|||---IMAGE_PROMPT---|||"
PERSPECTIVES_JSON_SEPARATOR = "|||---PERSPECTIVES_JSON---|||"

IMAGE_PROMPT_SUFFIX = ", photorealistic news style, high detail"

SUMMARY_PROMPT_TEMPLATE = """
You are an expert, unbiased news analyst. Your task is to synthesize information from various news sources to provide a neutral, balanced summary, and also provide analysis on how different media leanings cover specific points.

Here is a list of news outlets and their general political leanings:
- Left-Leaning: {left_sources}
- Right-Leaning: {right_sources}
- Centrist: {center_sources}

Topic to Summarize: "{topic}"

Instructions for your output:
Your output MUST be in a specific structure with three parts separated by unique separators.

PART 1: THE SUMMARY
1. Search for recent news articles (last 7 days) on the topic.
2. Write a concise, factual, and unbiased summary of 3-4 paragraphs.

PART 2: THE PULL QUOTE & IMAGE PROMPT
1. After the summary, insert the separator: '{pull_quote_separator}'.
2. After this separator, write the single most impactful sentence from your summary as a "pull quote".
3. After the pull quote, insert the separator: '{image_prompt_separator}'.
4. After this separator, write a short, neutral prompt for an image generation AI that visually represents the summary's key theme.

PART 3: PERSPECTIVES JSON
1. After the image prompt, insert the final separator: '{perspectives_separator}'.
2. After this final separator, you MUST provide a JSON object. This JSON object should be an array of "highlights".
3. For 2-4 key phrases or sentences in your summary that are likely to be framed differently by various media, create a highlight object.
4. Each highlight object in the JSON array must have two keys:
   - "textToHighlight": The exact string from your summary to be highlighted.
   - "perspectives": An object with three keys: "left", "center", and "right". The value for each key should be a brief (1-2 sentences) explanation of how that media leaning (Left, Center, Right) typically frames or reports on the "textToHighlight".

Example of the complete output structure:
[Your 3-4 paragraph summary is here...]
{pull_quote_separator}
[The single most important sentence from the summary]
{image_prompt_separator}
[Your image generation prompt here]
{perspectives_separator}
[
  {{
    "textToHighlight": "the recent delivery of F-16 fighter jets",
    "perspectives": {{
      "left": "Reporting often emphasizes the defensive nature of the jets and the international coalition's role in supporting Ukrainian sovereignty.",
      "center": "Focuses on the technical capabilities of the aircraft, the training timeline for pilots, and the potential impact on battlefield dynamics.",
      "right": "Coverage may question the slow pace of delivery and argue for more aggressive military aid to achieve a decisive outcome."
    }}
  }},
  {{
    "textToHighlight": "the economic impact of the war on global grain supplies",
    "perspectives": {{
      "left": "Highlights the humanitarian crisis and food insecurity in developing nations, often linking it to geopolitical power plays.",
      "center": "Reports on market fluctuations, shipping lane security, and diplomatic efforts to keep ports open, citing economic data.",
      "right": "Frames the issue around national security interests and the economic consequences for domestic consumers and farmers."
    }}
  }}
]
"""

FOCUS_PROMPT_TEMPLATE = """
You are an expert, unbiased news analyst.
Your task is to analyze the recent coverage of the war in Ukraine from a specific group of media outlets and summarize their primary focus.

Media Group to Analyze: {leaning}
Outlets in this group: {outlets}

Instructions:
1. Using Google Search, analyze news articles published in the last 7 days from the outlets listed above.
2. Identify the main narratives, recurring themes, and key points of emphasis in their coverage of the war in Ukraine.
3. Synthesize your findings into a concise, objective summary of 2-3 paragraphs. Do not inject your own opinions. The summary should strictly reflect the focus of the specified media group.
4. Your response should ONLY be the summary text.
"""

COVERAGE_STATS_PROMPT = """
You are a media analyst. Estimate the share of current news coverage that major media outlets devote to the war in Ukraine.

Return a JSON object with two keys:
- "us": percentage (0-100) of United States media coverage focused on the war in Ukraine.
- "eu": percentage (0-100) of European Union media coverage focused on the war in Ukraine.

Base the estimate on coverage from the last 30 days. Respond with JSON only.
"""

COVERAGE_TIMELINE_PROMPT = """
You are a media analyst. Estimate how the share of news coverage devoted to the war in Ukraine has changed over the last 12 months.

Return a JSON array with one object per month, oldest first. Each object has three keys:
- "date": the first day of the month in ISO format (YYYY-MM-DD).
- "us": percentage (0-100) of United States media coverage focused on the war in Ukraine that month.
- "eu": percentage (0-100) of European Union media coverage focused on the war in Ukraine that month.

Respond with JSON only.
"""


def _outlet_list(outlets: dict[Leaning, list[str]], leaning: Leaning) -> str:
    return ", ".join(outlets[leaning])


def build_summary_prompt(topic: str, outlets: dict[Leaning, list[str]] = NEWS_OUTLETS) -> str:
    """Build the three-part summary prompt for a topic.

    The response is expected to contain the summary, then a pull quote, an image
    prompt and a JSON array of highlights, each introduced by its separator.
    """
    return SUMMARY_PROMPT_TEMPLATE.format(
        topic=topic,
        left_sources=_outlet_list(outlets, Leaning.LEFT),
        right_sources=_outlet_list(outlets, Leaning.RIGHT),
        center_sources=_outlet_list(outlets, Leaning.CENTER),
        pull_quote_separator=PULL_QUOTE_SEPARATOR,
        image_prompt_separator=IMAGE_PROMPT_SEPARATOR,
        perspectives_separator=PERSPECTIVES_JSON_SEPARATOR,
    )


def build_focus_prompt(leaning: Leaning, outlets: dict[Leaning, list[str]] = NEWS_OUTLETS) -> str:
    """Build the prompt summarising what one media group is focusing on."""
    return FOCUS_PROMPT_TEMPLATE.format(
        leaning=leaning.value,
        outlets=_outlet_list(outlets, leaning),
    )
