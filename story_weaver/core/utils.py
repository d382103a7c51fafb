import logging
import re
from typing import Any, List, Sequence

logger = logging.getLogger(__name__)

# ——— Fixed fallback text ————————————————————————————————

SEED_DEFAULT_CHOICES = ["Explore the surroundings", "Continue forward", "Go back"]
FILLER_CHOICES = ["Explore further", "Look around", "Continue onward"]
FALLBACK_CHOICES = ["Explore further", "Talk to someone nearby", "Change direction"]

GENERIC_CONTINUATION = "As you make your choice, the story continues..."
APOLOGY_SNIPPET = "There was a problem continuing your adventure. Please try again."
END_MARKER = "THE END"
CLOSING_LINE = "THE END."
CHOICE_MARKER = "You chose: {choice}"

MAX_CHOICES = 3

# ——— JSON extraction ——————————————————————————————————

def extract_json(raw: str) -> str:
    """
    Strip markdown fences and return the outermost {...} block of `raw`.
    """
    cleaned = re.sub(r"```(?:json)?\s*", "", raw.strip(), flags=re.IGNORECASE)
    m = re.search(r"\{.*\}", cleaned, flags=re.DOTALL)
    return m.group(0) if m else cleaned

# ——— Choice handling ——————————————————————————————————

def valid_choices(choices: Any) -> List[str]:
    if not isinstance(choices, (list, tuple)):
        return []
    return [c.strip() for c in choices if isinstance(c, str) and c.strip()]

def seed_choices(choices: Any) -> List[str]:
    opts = valid_choices(choices)[:MAX_CHOICES]
    return opts or list(SEED_DEFAULT_CHOICES)

def normalize_choices(choices: Any, filler: Sequence[str] = FILLER_CHOICES) -> List[str]:
    """
    Coerce whatever the backend returned into exactly three options.

    Extra entries are dropped; short lists are padded with `filler` entries in
    order; nothing usable at all yields the fixed fallback list.
    """
    opts = valid_choices(choices)[:MAX_CHOICES]
    if not opts:
        logger.warning("No usable choices from backend, using fallback choices")
        return list(FALLBACK_CHOICES)
    opts.extend(filler[:MAX_CHOICES - len(opts)])
    return opts

# ——— End marker ————————————————————————————————————————

def has_end_marker(text: str) -> bool:
    return END_MARKER in text

def with_end_marker(text: str) -> str:
    if has_end_marker(text):
        return text
    return f"{text}\n\n{CLOSING_LINE}" if text else CLOSING_LINE
