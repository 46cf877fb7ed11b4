"""
Research Deck Agent - researches a topic on the web with Gemini and turns it into a 5-slide executive deck
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .api import get_router
from .config import debug_settings, get_settings
from .models import HealthCheck
from .state import get_orchestrator

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan"""
    settings = get_settings()
    configure_logging(settings.log_level)
    debug_settings(settings)
    if not settings.gemini_api_key:
        # Runs will fail into the ERROR state until a key is provided
        logger.warning("⚠️ GEMINI_API_KEY is not set")
    logger.info(f"{settings.service_name} started")

    yield

    logger.info(f"Shutting down {settings.service_name}")


app = FastAPI(
    title="Research Deck Agent",
    description="Web-grounded research synthesized into an executive slide deck",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(get_router())


@app.get("/health", response_model=HealthCheck)
async def health_check():
    """Health check endpoint"""
    settings = get_settings()
    return HealthCheck(
        service=settings.service_name,
        agent_status=get_orchestrator().status,
        api_key_configured=bool(settings.gemini_api_key),
        timestamp=datetime.utcnow(),
    )


# Browser page; mounted last so the API routes above take precedence
app.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="static")


def run() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(app, host=settings.service_host, port=settings.service_port)


if __name__ == "__main__":
    run()
