from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .utils import valid_choices

Theme = Literal["space", "fantasy", "horror"]
ArcType = Literal["hero-journey", "mystery", "quest", "revenge", "romance"]
Phase = Literal["setup", "rising action", "confrontation", "climax", "resolution", "complete"]

THEMES = ("space", "fantasy", "horror")
ARC_TYPES = ("hero-journey", "mystery", "quest", "revenge", "romance")

@dataclass
class StoryState:
    """
    Everything the controller knows about one story: the transcript so far,
    the choices on offer, and where the narrative sits in its arc.
    """
    theme: Theme = "space"
    arc_type: Optional[ArcType] = None
    snippets: List[str] = field(default_factory=list)      # append-only
    choices: List[str] = field(default_factory=list)
    phase: Phase = "setup"
    progress_percent: int = 0
    choices_made: int = 0
    complete: bool = False

# ——— Backend request / response shapes ————————————————————

def _join_paragraphs(value: Any) -> Any:
    # models sometimes return prose as a list of paragraphs
    if isinstance(value, list) and value and all(isinstance(p, str) for p in value):
        return "\n\n".join(p.strip() for p in value if p.strip())
    return value

class SeedRequest(BaseModel):
    theme: str
    arc_type: Optional[str] = Field(None, alias="arcType")

    model_config = {"populate_by_name": True}

class SeedResult(BaseModel):
    story_seed: str = Field("", alias="storySeed")
    initial_choices: List[str] = Field(default_factory=list, alias="initialChoices")

    model_config = {"populate_by_name": True}

    @field_validator("initial_choices", mode="before")
    @classmethod
    def _lenient_choices(cls, v: Any) -> List[str]:
        return valid_choices(v)

    @field_validator("story_seed", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else _join_paragraphs(v)

class ContinueRequest(BaseModel):
    theme: str
    arc_type: Optional[str] = Field(None, alias="arcType")
    previous_snippets: List[str] = Field(default_factory=list, alias="previousSnippets")
    current_choice: str = Field(..., alias="currentChoice")
    current_phase: Optional[str] = Field(None, alias="currentPhase")
    progress: Optional[int] = None
    is_story_complete: bool = Field(False, alias="isStoryComplete")

    model_config = {"populate_by_name": True}

class ContinueResult(BaseModel):
    next_snippet: str = Field("", alias="nextSnippet")
    next_choices: List[str] = Field(default_factory=list, alias="nextChoices")
    is_story_complete: bool = Field(False, alias="isStoryComplete")

    model_config = {"populate_by_name": True}

    @field_validator("next_choices", mode="before")
    @classmethod
    def _lenient_choices(cls, v: Any) -> List[str]:
        return valid_choices(v)

    @field_validator("next_snippet", "is_story_complete", mode="before")
    @classmethod
    def _none_to_default(cls, v: Any, info) -> Any:
        if v is None:
            return "" if info.field_name == "next_snippet" else False
        if info.field_name == "next_snippet":
            return _join_paragraphs(v)
        return v
