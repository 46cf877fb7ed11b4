"""
Configuration for the research deck agent.
"""

import logging
from typing import Optional
from pathlib import Path
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv, find_dotenv

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


def load_environment() -> Optional[Path]:
    """Load a .env file into the process environment.

    Looks next to the project first, then upwards from the CWD. As a last
    resort env.example is loaded without overriding real environment values.
    """
    base_dir = Path(__file__).resolve().parents[1]
    dotenv_path = base_dir / ".env"
    example_path = base_dir / "env.example"

    if dotenv_path.exists():
        load_dotenv(dotenv_path, override=True)
        return dotenv_path

    discovered = find_dotenv(usecwd=True)
    if discovered:
        load_dotenv(discovered, override=True)
        return Path(discovered)

    if example_path.exists():
        load_dotenv(example_path, override=False)
        return example_path
    return None


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # API key
    gemini_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "GOOGLE_AI_KEY", "gemini_api_key"),
    )

    # Models
    research_model: str = Field(default="gemini-2.5-flash", alias="RESEARCH_MODEL")
    synthesis_model: str = Field(default="gemini-2.5-flash", alias="SYNTHESIS_MODEL")

    # Research text beyond this many characters is dropped before synthesis
    max_context_chars: int = Field(default=20000, alias="MAX_CONTEXT_CHARS", gt=0)

    # Service Configuration
    service_name: str = Field(default="briefing-agent", alias="SERVICE_NAME")
    service_host: str = Field(default="0.0.0.0", alias="SERVICE_HOST")
    service_port: int = Field(default=8000, alias="SERVICE_PORT")
    debug: bool = Field(default=False, alias="DEBUG")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the current settings instance."""
    global _settings
    if _settings is None:
        load_environment()
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Drop the cached settings and read the environment again."""
    global _settings
    _settings = None
    return get_settings()


def require_api_key(settings: Optional[Settings] = None) -> str:
    """Return the Gemini API key or raise ConfigurationError."""
    settings = settings or get_settings()
    api_key = (settings.gemini_api_key or "").strip()
    if not api_key:
        raise ConfigurationError("GEMINI_API_KEY environment variable is missing")
    return api_key


def debug_settings(settings: Optional[Settings] = None) -> None:
    """Log current settings without exposing the key."""
    settings = settings or get_settings()
    logger.info("🔍 Current Settings:")
    logger.info(f"  Gemini API Key: {'✅ Set' if settings.gemini_api_key else '❌ Not set'}")
    logger.info(f"  Research Model: {settings.research_model}")
    logger.info(f"  Synthesis Model: {settings.synthesis_model}")
    logger.info(f"  Max Context Chars: {settings.max_context_chars}")
    logger.info(f"  Service: {settings.service_name} on {settings.service_host}:{settings.service_port}")
    logger.info(f"  Debug Mode: {settings.debug}")
    logger.info(f"  Log Level: {settings.log_level}")
