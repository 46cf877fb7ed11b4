"""
Shared fixtures: a recording ResearchProvider double and sample payloads.
"""
from typing import List, Optional

import pytest

from briefing_agent.llm_client import ResearchProvider
from briefing_agent.models import ResearchResult, Slide, Source


def make_slides(count: int = 5) -> List[Slide]:
    roles = ["Overview", "Landscape", "Challenges", "Outlook", "Recommendation"]
    return [
        Slide(
            title=f"{roles[i % len(roles)]} slide",
            points=[f"Point {i}.{j}" for j in range(1, 4 if i % 2 else 5)],
            summary=f"Summary for slide {i + 1}",
            metric="40% growth" if i == 0 else None,
        )
        for i in range(count)
    ]


SAMPLE_SOURCES = [
    Source(title="ITER progress report", uri="https://example.org/iter"),
    Source(title="NIF ignition", uri="https://example.org/nif"),
]


class RecordingProvider(ResearchProvider):
    """In-memory provider that records every call it receives."""

    def __init__(
        self,
        research: Optional[ResearchResult] = None,
        slides: Optional[List[Slide]] = None,
        research_error: Optional[Exception] = None,
        synthesis_error: Optional[Exception] = None,
    ):
        self.research = research or ResearchResult(raw_text="Fusion research notes", sources=list(SAMPLE_SOURCES))
        self.slides = slides if slides is not None else make_slides()
        self.research_error = research_error
        self.synthesis_error = synthesis_error
        self.research_calls: List[str] = []
        self.synthesis_calls: List[tuple] = []
        # Status observed by the orchestrator at the moment each call was made
        self.observed_status = []
        self.orchestrator = None

    async def perform_research(self, topic: str) -> ResearchResult:
        self.research_calls.append(topic)
        if self.orchestrator is not None:
            self.observed_status.append(self.orchestrator.status)
        if self.research_error:
            raise self.research_error
        return self.research

    async def synthesize_presentation(self, topic: str, research_context: str) -> List[Slide]:
        self.synthesis_calls.append((topic, research_context))
        if self.orchestrator is not None:
            self.observed_status.append(self.orchestrator.status)
        if self.synthesis_error:
            raise self.synthesis_error
        return self.slides


@pytest.fixture
def provider():
    return RecordingProvider()


@pytest.fixture
def sample_slides():
    return make_slides()
