"""
Pydantic models shared by the pipeline, the renderer and the HTTP API.
"""

from datetime import datetime
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class AgentStatus(str, Enum):
    """Lifecycle of a single pipeline run."""
    IDLE = "IDLE"
    RESEARCHING = "RESEARCHING"
    SYNTHESIZING = "SYNTHESIZING"
    COMPLETE = "COMPLETE"
    ERROR = "ERROR"


class Source(BaseModel):
    """Web citation consulted during research"""
    title: str = Field(..., description="Page title reported by grounding metadata")
    uri: str = Field(..., description="Page URI; unique within a result")


class ResearchResult(BaseModel):
    """Output of the grounded research call"""
    raw_text: str
    sources: List[Source] = Field(default_factory=list)


class Slide(BaseModel):
    """One slide of the executive deck"""
    title: str = Field(..., description="Slide headline")
    points: List[str] = Field(..., description="3-4 concise bullet points")
    summary: str = Field(..., description="Short executive summary for the speaker notes")
    metric: Optional[str] = Field(None, description="Key statistic from the research, e.g. '40% growth'")


class PresentationData(BaseModel):
    """Terminal artifact of a successful run"""
    topic: str
    slides: List[Slide]
    sources: List[Source] = Field(default_factory=list)


class AgentSnapshot(BaseModel):
    """Read-only copy of the orchestrator state."""
    status: AgentStatus = AgentStatus.IDLE
    topic: str = ""
    result: Optional[PresentationData] = None
    error: Optional[str] = None


# API models
class StartRequest(BaseModel):
    topic: str


StepState = Literal["active", "completed", "pending"]


class StatusStep(BaseModel):
    status: AgentStatus
    label: str
    subtext: str
    state: StepState


class AgentView(BaseModel):
    """Snapshot plus everything the browser needs to draw it."""
    status: AgentStatus
    topic: str
    result: Optional[PresentationData] = None
    error: Optional[str] = None
    steps: List[StatusStep] = Field(default_factory=list)
    show_input: bool = True
    show_progress: bool = False
    show_deck: bool = False


class HealthCheck(BaseModel):
    """Health check response model."""
    service: str
    status: str = "healthy"
    agent_status: AgentStatus
    api_key_configured: bool
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    version: str = "0.1.0"
