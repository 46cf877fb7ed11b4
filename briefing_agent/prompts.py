"""Prompts and the response schema for the two Gemini calls.

The research call runs with Google Search grounding and returns free text.
The synthesis call turns that text into a JSON array of exactly five slides,
one per entry of SLIDE_ROLES, in order.
"""

from __future__ import annotations

from google.genai import types

RESEARCH_SYSTEM_PROMPT = (
    "You are an elite technical researcher.\n"
    "Your goal is to research the user's topic deeply using Google Search.\n"
    "Focus on:\n"
    "1. Recent breakthroughs and news.\n"
    "2. Technical challenges and bottlenecks.\n"
    "3. Future market or technological outlook.\n"
    "4. Key statistics and data points.\n\n"
    "Provide a comprehensive, structured report. Do not use markdown formatting "
    "like bolding or headers too heavily, just clear paragraphs."
)

SLIDE_ROLES = (
    "Executive Overview",
    "Current Landscape / Technical Details",
    "Challenges & Risks",
    "Future Outlook",
    "Strategic Recommendation",
)

SLIDE_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "title": types.Schema(type=types.Type.STRING, description="Slide headline"),
            "points": types.Schema(
                type=types.Type.ARRAY,
                items=types.Schema(type=types.Type.STRING),
                description="3-4 concise bullet points",
            ),
            "summary": types.Schema(
                type=types.Type.STRING,
                description="A short executive summary paragraph for the speaker notes",
            ),
            "metric": types.Schema(
                type=types.Type.STRING,
                description="A key statistic or number mentioned in the research, if applicable (e.g. '40% growth')",
            ),
        },
        required=["title", "points", "summary"],
    ),
)


def truncate_context(research_context: str, limit: int) -> str:
    """Keep the first `limit` characters, with no marker added."""
    return research_context[:limit]


def build_research_prompt(topic: str) -> str:
    return f'Investigate the following topic deeply: "{topic}"'


def build_synthesis_prompt(topic: str, research_context: str) -> str:
    requirements = "\n".join(
        f"{i}. Slide {i}: {role}" for i, role in enumerate(SLIDE_ROLES, start=1)
    )
    return (
        "You are a Chief Strategy Officer.\n"
        f'Based on the following research report on "{topic}", create a '
        f"{len(SLIDE_ROLES)}-slide executive presentation.\n\n"
        "Research Context:\n"
        f"{research_context}\n\n"
        "Requirements:\n"
        f"{requirements}\n\n"
        "Each slide has 3-4 bullet points. "
        "Make the content professional, punchy, and insightful."
    )
