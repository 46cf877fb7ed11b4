"""
Gemini client for the two pipeline phases: grounded research and slide synthesis.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional

from google import genai
from google.genai import types
from pydantic import ValidationError

from .config import Settings, get_settings, require_api_key
from .errors import RetrievalError, SynthesisError
from .models import ResearchResult, Slide, Source
from .prompts import (
    RESEARCH_SYSTEM_PROMPT,
    SLIDE_SCHEMA,
    build_research_prompt,
    build_synthesis_prompt,
    truncate_context,
)

logger = logging.getLogger(__name__)

NO_TEXT_PLACEHOLDER = "No text generated."


class ResearchProvider(ABC):
    """Capability the orchestrator depends on; one implementation per vendor."""

    @abstractmethod
    async def perform_research(self, topic: str) -> ResearchResult:
        """Research `topic` on the live web and return text plus citations."""
        pass

    @abstractmethod
    async def synthesize_presentation(self, topic: str, research_context: str) -> List[Slide]:
        """Turn research text into the five-slide deck."""
        pass


def dedupe_sources(sources: Iterable[Source]) -> List[Source]:
    """Drop repeated URIs; the first occurrence wins and order is kept."""
    seen = {}
    for source in sources:
        if source.uri not in seen:
            seen[source.uri] = source
    return list(seen.values())


def extract_sources(response: Any) -> List[Source]:
    """Read web citations from the first candidate's grounding metadata.

    Chunks without both a title and a URI are skipped.
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []

    found = []
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        uri = getattr(web, "uri", None)
        title = getattr(web, "title", None)
        if uri and title:
            found.append(Source(title=title, uri=uri))
    return dedupe_sources(found)


def parse_slides(json_text: Optional[str]) -> List[Slide]:
    """Parse the synthesis response body into slides."""
    if not json_text:
        raise SynthesisError("Failed to generate JSON")
    try:
        payload = json.loads(json_text)
    except json.JSONDecodeError as e:
        raise SynthesisError(f"Synthesis response is not valid JSON: {e}") from e
    if not isinstance(payload, list):
        raise SynthesisError("Synthesis response is not a JSON array")
    try:
        return [Slide.model_validate(item) for item in payload]
    except ValidationError as e:
        raise SynthesisError(f"Synthesis response does not match the slide schema: {e}") from e


class GeminiResearchProvider(ResearchProvider):
    """Google Gemini implementation of both phases."""

    def __init__(
        self,
        api_key: str,
        research_model: str = "gemini-2.5-flash",
        synthesis_model: str = "gemini-2.5-flash",
        max_context_chars: int = 20000,
        client: Optional[genai.Client] = None,
    ):
        self.research_model = research_model
        self.synthesis_model = synthesis_model
        self.max_context_chars = max_context_chars
        self.client = client or genai.Client(api_key=api_key)

    async def perform_research(self, topic: str) -> ResearchResult:
        logger.info(f"🔍 Researching '{topic}' with {self.research_model} (Google Search grounding)")
        try:
            response = await self.client.aio.models.generate_content(
                model=self.research_model,
                contents=build_research_prompt(topic),
                config=types.GenerateContentConfig(
                    system_instruction=RESEARCH_SYSTEM_PROMPT,
                    tools=[types.Tool(google_search=types.GoogleSearch())],
                ),
            )
            raw_text = response.text or NO_TEXT_PLACEHOLDER
            sources = extract_sources(response)
        except Exception as e:
            raise RetrievalError(f"Gemini research error: {e}") from e

        logger.info(f"Research returned {len(raw_text)} chars and {len(sources)} sources")
        return ResearchResult(raw_text=raw_text, sources=sources)

    async def synthesize_presentation(self, topic: str, research_context: str) -> List[Slide]:
        context = truncate_context(research_context, self.max_context_chars)
        if len(context) < len(research_context):
            logger.info(f"Research context truncated from {len(research_context)} to {len(context)} chars")

        logger.info(f"🧩 Synthesizing slides for '{topic}' with {self.synthesis_model}")
        try:
            response = await self.client.aio.models.generate_content(
                model=self.synthesis_model,
                contents=build_synthesis_prompt(topic, context),
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=SLIDE_SCHEMA,
                ),
            )
            json_text = response.text
        except Exception as e:
            raise SynthesisError(f"Gemini synthesis error: {e}") from e

        slides = parse_slides(json_text)
        logger.info(f"Synthesis produced {len(slides)} slides")
        return slides


def create_provider(settings: Optional[Settings] = None) -> ResearchProvider:
    """Build the Gemini provider from settings.

    The key is checked before anything is constructed, so a missing key never
    reaches the network.
    """
    settings = settings or get_settings()
    api_key = require_api_key(settings)
    return GeminiResearchProvider(
        api_key=api_key,
        research_model=settings.research_model,
        synthesis_model=settings.synthesis_model,
        max_context_chars=settings.max_context_chars,
    )
