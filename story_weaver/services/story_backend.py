import json
import logging
from typing import Any, Optional, Protocol

from pydantic import ValidationError

from story_weaver.core.models import ContinueRequest, ContinueResult, SeedRequest, SeedResult
from story_weaver.core.settings import settings
from story_weaver.core.utils import (
    FALLBACK_CHOICES,
    GENERIC_CONTINUATION,
    extract_json,
    seed_choices,
    with_end_marker,
)
from story_weaver.services.prompts import CONCLUDE_PROMPT, CONTINUE_PROMPT, PHASE_GUIDANCE, SEED_PROMPT

logger = logging.getLogger(__name__)

class StoryBackendError(RuntimeError):
    """The backend answered, but with nothing usable."""

class StoryBackend(Protocol):
    """Generative text service behind the story controller."""

    def seed(self, request: SeedRequest) -> SeedResult:
        ...

    def continue_story(self, request: ContinueRequest) -> ContinueResult:
        ...

def _response_text(resp: Any) -> str:
    if isinstance(resp, dict):
        return (resp.get("response") or "").strip()
    return (getattr(resp, "response", "") or "").strip()

def _parse(raw: str) -> Optional[dict]:
    try:
        data = json.loads(extract_json(raw))
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None

class OllamaStoryBackend:
    """
    StoryBackend that prompts a local Ollama model for JSON and repairs what
    comes back. Transport errors propagate; malformed output does not.
    """

    def __init__(self, client: Any = None):
        if client is None:
            from story_weaver.services.ollama_client import ollama_client
            client = ollama_client
        self.client = client

    def seed(self, request: SeedRequest) -> SeedResult:
        arc = request.arc_type or "classic adventure"
        prompt = SEED_PROMPT.format(theme=request.theme, arc_type=arc)
        resp = self.client.generate(
            prompt=prompt,
            max_tokens=settings.seed_max_tokens,
            temperature=settings.seed_temperature,
        )
        raw = _response_text(resp)
        data = _parse(raw)
        if data is None:
            result = SeedResult(story_seed=raw)
        else:
            try:
                result = SeedResult.model_validate(data)
            except ValidationError as e:
                logger.warning("Seed parse error: %s\nRaw: %s", e, raw)
                raise StoryBackendError("The storyteller returned a malformed opening scene.") from e
        if not result.story_seed.strip():
            raise StoryBackendError("The storyteller returned no opening scene.")
        result.initial_choices = seed_choices(result.initial_choices)
        logger.info("Seeded %s/%s story (%d chars)", request.theme, arc, len(result.story_seed))
        return result

    def continue_story(self, request: ContinueRequest) -> ContinueResult:
        history = "\n\n".join(request.previous_snippets[-settings.history_snippets:])
        fields = dict(
            theme=request.theme,
            arc_type=request.arc_type or "classic adventure",
            history=history,
            choice=request.current_choice,
        )
        if request.is_story_complete:
            prompt = CONCLUDE_PROMPT.format(**fields)
        else:
            phase = request.current_phase or "setup"
            prompt = CONTINUE_PROMPT.format(
                phase=phase,
                progress=request.progress or 0,
                phase_guidance=PHASE_GUIDANCE.get(phase, ""),
                **fields,
            )
        resp = self.client.generate(
            prompt=prompt,
            max_tokens=settings.snippet_max_tokens,
            temperature=settings.snippet_temperature,
        )
        raw = _response_text(resp)
        data = _parse(raw)
        if data is None:
            result = ContinueResult(next_snippet=raw)
        else:
            try:
                result = ContinueResult.model_validate(data)
            except ValidationError as e:
                logger.warning("Snippet parse error: %s\nRaw: %s", e, raw)
                result = ContinueResult(
                    next_snippet=GENERIC_CONTINUATION,
                    next_choices=data.get("nextChoices", data.get("next_choices")),
                )

        if not result.next_snippet.strip():
            logger.error("No valid story snippet returned, substituting generic continuation")
            return ContinueResult(next_snippet=GENERIC_CONTINUATION, next_choices=list(FALLBACK_CHOICES))

        if request.is_story_complete or result.is_story_complete:
            logger.info(
                "Story completion triggered (requested=%s, model=%s)",
                request.is_story_complete, result.is_story_complete,
            )
            return ContinueResult(
                next_snippet=with_end_marker(result.next_snippet),
                next_choices=[],
                is_story_complete=True,
            )
        logger.debug("Snippet generated (%d chars, %d choices)", len(result.next_snippet), len(result.next_choices))
        return result
