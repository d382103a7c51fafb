import logging

from pydantic import HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

class Settings(BaseSettings):
    ollama_host: HttpUrl = "http://localhost:11434"
    ollama_model: str = "gemma3:4b"
    ollama_max_attempts: int = 1
    default_theme: str = "space"
    default_arc_type: str = "hero-journey"
    seed_max_tokens: int = 900
    seed_temperature: float = 0.9
    snippet_max_tokens: int = 900
    snippet_temperature: float = 0.8
    history_snippets: int = 12
    typewriter_delay: float = 0.01
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", validate_assignment=True, extra="ignore")

settings = Settings()

def configure_logging() -> None:
    """
    Apply the configured log level to the root logger (entry points only).
    """
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug("Logging configured at %s", settings.log_level)
