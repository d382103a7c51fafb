import logging
from typing import Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

# Ordered (phase, choices consumed) pairs. Never mutated at runtime.
PHASE_BUDGETS: Tuple[Tuple[str, int], ...] = (
    ("setup", 5),
    ("rising action", 10),
    ("confrontation", 10),
    ("climax", 5),
    ("resolution", 5),
)

TOTAL_BUDGET = sum(budget for _, budget in PHASE_BUDGETS)

def compute_phase(
    choices_made: int,
    total_budget: Optional[int] = None,
    phase_budgets: Sequence[Tuple[str, int]] = PHASE_BUDGETS,
) -> Tuple[str, int]:
    """
    Map the number of choices made so far to (phase name, progress percent).

    Progress is floor(100 * choices_made / total), capped at 100. The phase is
    the first entry whose cumulative budget exceeds `choices_made`; once the
    total is reached the last phase is returned. `choices_made` only ever grows,
    so the mapping never moves backwards.
    """
    if not phase_budgets:
        raise ValueError("phase_budgets must not be empty")
    if choices_made < 0:
        raise ValueError(f"choices_made must be non-negative, got {choices_made}")
    total = sum(b for _, b in phase_budgets) if total_budget is None else total_budget
    if total <= 0:
        raise ValueError(f"total budget must be positive, got {total}")

    progress = min(100, (100 * choices_made) // total)

    final_phase = phase_budgets[-1][0]
    if choices_made >= total:
        return final_phase, progress

    running = 0
    for name, budget in phase_budgets:
        running += budget
        if running > choices_made:
            return name, progress
    return final_phase, progress
