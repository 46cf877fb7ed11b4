"""Research deck agent.

Researches a topic with Gemini and Google Search grounding, then synthesizes
the findings into a five-slide executive deck:

- llm_client: the two Gemini calls behind the ResearchProvider interface
- state: the pipeline orchestrator (IDLE -> RESEARCHING -> SYNTHESIZING -> COMPLETE | ERROR)
- render: pure view helpers for the browser page

The FastAPI router is exposed via `get_router()` in `api.py`; the app lives in `main.py`.
"""

__version__ = "0.1.0"

from .api import get_router  # noqa: E402

__all__ = ["get_router", "__version__"]
