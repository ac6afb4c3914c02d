"""Domain services for PromptGate.

Services contain the evaluation logic. They have no dependencies on
infrastructure or external frameworks.
"""

from promptgate.domain.services.access_composer import compose_access_decision
from promptgate.domain.services.group_evaluator import (
    MAX_RESUME_STEPS,
    GroupEvaluator,
    evaluate_group,
)
from promptgate.domain.services.window_matcher import (
    exception_blocks,
    exception_end,
    next_window_start,
    window_matches,
)
from promptgate.domain.services.window_validator import (
    WindowValidationError,
    WindowValidator,
)

__all__ = [
    "GroupEvaluator",
    "MAX_RESUME_STEPS",
    "WindowValidationError",
    "WindowValidator",
    "compose_access_decision",
    "evaluate_group",
    "exception_blocks",
    "exception_end",
    "next_window_start",
    "window_matches",
]
