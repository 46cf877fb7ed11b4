from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from .models import AgentView, StartRequest
from .render import TOPIC_SUGGESTIONS, render_view
from .state import get_orchestrator

logger = logging.getLogger(__name__)


def get_router() -> APIRouter:
    router = APIRouter(prefix="/agent", tags=["agent"])

    @router.get("/state", response_model=AgentView)
    async def get_state():
        return render_view(get_orchestrator().snapshot())

    @router.post("/start", response_model=AgentView, status_code=202)
    async def start(req: StartRequest):
        orchestrator = get_orchestrator()
        if not req.topic.strip():
            raise HTTPException(status_code=422, detail="topic must not be empty")
        if orchestrator.launch(req.topic) is None:
            raise HTTPException(
                status_code=409,
                detail=f"Cannot start while agent is {orchestrator.status.value}",
            )
        logger.info(f"Started pipeline for topic: {req.topic}")
        return render_view(orchestrator.snapshot())

    @router.post("/reset", response_model=AgentView)
    async def reset():
        orchestrator = get_orchestrator()
        if not orchestrator.reset():
            raise HTTPException(
                status_code=409,
                detail=f"Cannot reset while agent is {orchestrator.status.value}",
            )
        return render_view(orchestrator.snapshot())

    @router.get("/suggestions")
    async def suggestions():
        return {"suggestions": TOPIC_SUGGESTIONS}

    return router
