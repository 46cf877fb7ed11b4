"""View helpers for the browser page.

Everything here is a pure function of an AgentSnapshot; no state is changed.
"""

from __future__ import annotations

from typing import List

from .models import AgentSnapshot, AgentStatus, AgentView, StatusStep

PIPELINE_STEPS = (
    (
        AgentStatus.RESEARCHING,
        "Conducting Autonomous Research",
        "Scanning web sources, verifying facts with Google Grounding...",
    ),
    (
        AgentStatus.SYNTHESIZING,
        "Synthesizing Executive Summary",
        "Distilling insights, formatting slides, generating strategic outlook...",
    ),
)

TOPIC_SUGGESTIONS = ["Quantum Computing", "Fusion Energy", "AGI Safety", "Crispr Technology"]


def render_status_steps(status: AgentStatus) -> List[StatusStep]:
    """Progress steps for a working pipeline; empty when nothing is running."""
    order = [step_status for step_status, _, _ in PIPELINE_STEPS]
    if status not in order:
        return []
    current = order.index(status)

    steps = []
    for idx, (step_status, label, subtext) in enumerate(PIPELINE_STEPS):
        if idx == current:
            state = "active"
        elif current > idx:
            state = "completed"
        else:
            state = "pending"
        steps.append(StatusStep(status=step_status, label=label, subtext=subtext, state=state))
    return steps


def render_view(snapshot: AgentSnapshot) -> AgentView:
    status = snapshot.status
    working = status in (AgentStatus.RESEARCHING, AgentStatus.SYNTHESIZING)
    return AgentView(
        status=status,
        topic=snapshot.topic,
        result=snapshot.result,
        error=snapshot.error,
        steps=render_status_steps(status),
        show_input=status in (AgentStatus.IDLE, AgentStatus.ERROR),
        show_progress=working,
        show_deck=status == AgentStatus.COMPLETE and snapshot.result is not None,
    )
