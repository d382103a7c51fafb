import logging
from typing import Any, Optional

import httpx
from ollama import Client, ResponseError
from tenacity import retry, wait_exponential, stop_after_attempt, retry_if_exception_type

from story_weaver.core.settings import settings

logger = logging.getLogger(__name__)

def _retry(fn):
    return retry(
        retry=retry_if_exception_type((ResponseError, ConnectionError, httpx.TransportError)),
        wait=wait_exponential(min=1, max=5),
        stop=stop_after_attempt(max(1, settings.ollama_max_attempts)),
        reraise=True,
    )(fn)

class OllamaClient:
    """
    Thin wrapper around Ollama’s HTTP API for JSON story generation.
    """

    def __init__(self, host: Optional[str] = None, model: Optional[str] = None):
        self.host = host or str(settings.ollama_host)
        self.model = model or settings.ollama_model
        self._client = Client(host=self.host)

    @_retry
    def generate(
        self,
        prompt: str,
        max_tokens: int = 900,
        temperature: float = 0.8,
        json_format: bool = True,
    ) -> Any:
        opts = {"temperature": temperature, "num_predict": max_tokens}
        fmt = "json" if json_format else ""
        try:
            return self._client.generate(model=self.model, prompt=prompt, options=opts, format=fmt)
        except ResponseError as e:
            if e.status_code == 404:
                logger.warning("Model %s not found, pulling...", self.model)
                self._client.pull(self.model)
                return self._client.generate(model=self.model, prompt=prompt, options=opts, format=fmt)
            raise

    def list_models(self) -> Any:
        return self._client.list()

    def is_available(self) -> bool:
        try:
            self.list_models()
            return True
        except (ResponseError, ConnectionError, httpx.HTTPError) as e:
            logger.warning("Ollama at %s unavailable: %s", self.host, e)
            return False

ollama_client = OllamaClient()
