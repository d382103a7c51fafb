import logging
from typing import Callable, List, Optional, Sequence, Tuple

from story_weaver.core.models import ARC_TYPES, THEMES, ContinueRequest, SeedRequest, StoryState
from story_weaver.core.phases import PHASE_BUDGETS, compute_phase
from story_weaver.core.settings import settings
from story_weaver.core.utils import (
    APOLOGY_SNIPPET,
    CHOICE_MARKER,
    CLOSING_LINE,
    GENERIC_CONTINUATION,
    has_end_marker,
    normalize_choices,
    seed_choices,
)
from story_weaver.services.story_backend import StoryBackend, StoryBackendError

logger = logging.getLogger(__name__)

Observer = Callable[[StoryState], None]

class StoryController:
    """
    Owns the StoryState and mediates every backend call. At most one request
    is in flight; anything arriving while `loading` is set is dropped.
    """

    def __init__(
        self,
        backend: StoryBackend,
        theme: Optional[str] = None,
        arc_type: Optional[str] = None,
        phase_budgets: Sequence[Tuple[str, int]] = PHASE_BUDGETS,
    ):
        self.backend = backend
        self.phase_budgets = tuple(phase_budgets)
        theme = theme or settings.default_theme
        arc_type = arc_type if arc_type is not None else settings.default_arc_type
        _check_theme(theme)
        _check_arc_type(arc_type)
        self.state = StoryState(theme=theme, arc_type=arc_type)
        self.loading = False
        self.error: Optional[str] = None
        self.initialized = False
        self._observers: List[Observer] = []

    # ——— observers ———————————————————————————————————————

    def subscribe(self, callback: Observer) -> None:
        self._observers.append(callback)

    def _notify(self) -> None:
        for cb in list(self._observers):
            try:
                cb(self.state)
            except Exception:
                logger.exception("Story observer %r failed", cb)

    # ——— operations ——————————————————————————————————————

    def start_story(self, theme: Optional[str] = None, arc_type: Optional[str] = None) -> StoryState:
        if theme is not None or arc_type is not None:
            self.change_story(
                theme if theme is not None else self.state.theme,
                arc_type if arc_type is not None else self.state.arc_type,
            )
        if self.initialized or self.loading:
            return self.state

        self.loading = True
        self.error = None
        self._notify()
        try:
            seed = self.backend.seed(SeedRequest(theme=self.state.theme, arc_type=self.state.arc_type))
            text = (seed.story_seed or "").strip()
            if not text:
                raise StoryBackendError("The storyteller returned no opening scene.")
        except Exception as e:
            logger.exception("Failed to seed story")
            self.error = str(e) or "Failed to seed story."
            self.state = StoryState(theme=self.state.theme, arc_type=self.state.arc_type)
        else:
            self.state = StoryState(
                theme=self.state.theme,
                arc_type=self.state.arc_type,
                snippets=[seed.story_seed],
                choices=seed_choices(seed.initial_choices),
            )
            self.initialized = True
            logger.info("Story initialized (%s/%s): choices=%s",
                        self.state.theme, self.state.arc_type, self.state.choices)
        finally:
            self.loading = False
        self._notify()
        return self.state

    def choose_option(self, choice: str) -> StoryState:
        state = self.state
        if self.loading or state.complete or not self.initialized:
            logger.debug("Ignoring choice %r (loading=%s complete=%s)", choice, self.loading, state.complete)
            return state

        self.loading = True
        self.error = None
        previous_choices = list(state.choices)
        state.snippets.append(CHOICE_MARKER.format(choice=choice))
        state.choices_made += 1
        phase, progress = compute_phase(state.choices_made, phase_budgets=self.phase_budgets)
        state.phase = phase
        state.progress_percent = max(state.progress_percent, progress)
        state.choices = []
        self._notify()

        request = ContinueRequest(
            theme=state.theme,
            arc_type=state.arc_type,
            previous_snippets=list(state.snippets),
            current_choice=choice,
            current_phase=state.phase,
            progress=state.progress_percent,
            is_story_complete=state.progress_percent >= 100,
        )
        try:
            result = self.backend.continue_story(request)
        except Exception as e:
            logger.exception("Failed to generate next snippet")
            state.snippets.append(APOLOGY_SNIPPET)
            state.choices = previous_choices
            self.error = str(e) or "Failed to generate next snippet."
        else:
            text = result.next_snippet if (result.next_snippet or "").strip() else GENERIC_CONTINUATION
            state.snippets.append(text)
            if result.is_story_complete or state.progress_percent >= 100:
                self.finalize_story()
            else:
                state.choices = normalize_choices(result.next_choices)
            logger.info("Choice %d applied: phase=%s progress=%d%%", state.choices_made, state.phase, state.progress_percent)
        finally:
            self.loading = False
        self._notify()
        return state

    def finalize_story(self) -> StoryState:
        state = self.state
        if state.complete:
            return state
        state.complete = True
        state.choices = []
        state.phase = "complete"
        state.progress_percent = 100
        if not state.snippets or not has_end_marker(state.snippets[-1]):
            state.snippets.append(CLOSING_LINE)
        logger.info("Story complete after %d choices", state.choices_made)
        self._notify()
        return state

    def reset_story(self) -> StoryState:
        self.state = StoryState(theme=self.state.theme, arc_type=self.state.arc_type)
        self.initialized = False
        self.error = None
        self._notify()
        return self.state

    def change_story(self, theme: str, arc_type: Optional[str]) -> None:
        """Switch theme and arc together; the story resets at most once."""
        _check_theme(theme)
        _check_arc_type(arc_type)
        if (theme, arc_type) != (self.state.theme, self.state.arc_type):
            self.state.theme = theme
            self.state.arc_type = arc_type
            self.reset_story()

    def select_theme(self, theme: str) -> None:
        _check_theme(theme)
        if theme != self.state.theme:
            self.state.theme = theme
            self.reset_story()

    def select_arc_type(self, arc_type: Optional[str]) -> None:
        _check_arc_type(arc_type)
        if arc_type != self.state.arc_type:
            self.state.arc_type = arc_type
            self.reset_story()

def _check_theme(theme: str) -> None:
    if theme not in THEMES:
        raise ValueError(f"Unknown theme {theme!r}; expected one of {', '.join(THEMES)}")

def _check_arc_type(arc_type: Optional[str]) -> None:
    if arc_type is not None and arc_type not in ARC_TYPES:
        raise ValueError(f"Unknown arc type {arc_type!r}; expected one of {', '.join(ARC_TYPES)}")
