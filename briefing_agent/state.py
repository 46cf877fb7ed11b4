from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from .llm_client import ResearchProvider, create_provider
from .models import AgentSnapshot, AgentStatus, PresentationData

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = (
    "The agent encountered an error while connecting to the knowledge base. "
    "Please verify your API key or try a different topic."
)

STARTABLE = (AgentStatus.IDLE, AgentStatus.ERROR)
RESETTABLE = (AgentStatus.IDLE, AgentStatus.COMPLETE, AgentStatus.ERROR)


class PipelineOrchestrator:
    """Runs research then synthesis for one topic at a time.

    State is process-wide and in memory only: a status, the topic of the
    current run, the finished deck (COMPLETE only) and a user-facing error
    message (ERROR only). Renderers read it through `snapshot()`.
    """

    def __init__(self, provider_factory: Callable[[], ResearchProvider] = create_provider) -> None:
        self._provider_factory = provider_factory
        self.status = AgentStatus.IDLE
        self.topic = ""
        self.result: Optional[PresentationData] = None
        self.error: Optional[str] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def busy(self) -> bool:
        return self.status in (AgentStatus.RESEARCHING, AgentStatus.SYNTHESIZING)

    def can_start(self, topic: str) -> bool:
        return self.status in STARTABLE and bool((topic or "").strip())

    def begin(self, topic: str) -> bool:
        """Move to RESEARCHING if a run may start; returns False otherwise."""
        if not self.can_start(topic):
            logger.info(f"Ignoring start while {self.status.value} (topic={topic!r})")
            return False
        self.topic = topic
        self.result = None
        self.error = None
        self._set_status(AgentStatus.RESEARCHING)
        return True

    async def start(self, topic: str) -> bool:
        """Run a whole pipeline for `topic`. Returns False if it never started."""
        if not self.begin(topic):
            return False
        await self._run(topic)
        return True

    def launch(self, topic: str) -> Optional[asyncio.Task]:
        """Start a run in the background on the running event loop."""
        loop = asyncio.get_running_loop()
        if not self.begin(topic):
            return None
        # Hold a reference so the loop does not drop the task mid-run
        self._task = loop.create_task(self._run(topic))
        return self._task

    async def _run(self, topic: str) -> None:
        try:
            provider = self._provider_factory()

            # 1. Research phase
            research = await provider.perform_research(topic)

            # 2. Synthesis phase
            self._set_status(AgentStatus.SYNTHESIZING)
            slides = await provider.synthesize_presentation(topic, research.raw_text)

            self.result = PresentationData(topic=topic, slides=slides, sources=research.sources)
            self._set_status(AgentStatus.COMPLETE)
            logger.info(f"✅ Deck ready for '{topic}': {len(slides)} slides, {len(research.sources)} sources")
        except asyncio.CancelledError:
            logger.warning(f"Pipeline for '{topic}' cancelled during {self.status.value}")
            self._fail()
            raise
        except Exception:
            logger.exception(f"❌ Pipeline failed for '{topic}' during {self.status.value}")
            self._fail()

    def _fail(self) -> None:
        self.result = None
        self.error = GENERIC_ERROR_MESSAGE
        self._set_status(AgentStatus.ERROR)

    def reset(self) -> bool:
        """Return to IDLE. No-op while a run is in flight."""
        if self.status not in RESETTABLE:
            logger.info(f"Ignoring reset while {self.status.value}")
            return False
        self.topic = ""
        self.result = None
        self.error = None
        self._set_status(AgentStatus.IDLE)
        return True

    def snapshot(self) -> AgentSnapshot:
        return AgentSnapshot(
            status=self.status,
            topic=self.topic,
            result=self.result.model_copy(deep=True) if self.result else None,
            error=self.error,
        )

    def _set_status(self, status: AgentStatus) -> None:
        if status != self.status:
            logger.info(f"Agent status: {self.status.value} -> {status.value}")
        self.status = status


agent_state = PipelineOrchestrator()


def get_orchestrator() -> PipelineOrchestrator:
    """Get the process-wide orchestrator."""
    return agent_state
