"""survey_logic — conditional visibility and answer piping for surveys.

Public API:
    is_visible          — True if a question's logic leaves it visible
    resolve_visibility  — full VisibilityDecision (matched rule, jump hint)
    condition_matches   — test one simple condition against an answer value
    apply_piping        — substitute earlier answers into question text
    VisibilityResolver  — class form of the visibility functions
    ConditionEvaluator  — operator semantics shared by the resolver
    PipingEngine        — class form of apply_piping (custom no-answer text)
    SurveyEngine        — one full evaluation pass over a survey
    SurveyStore         — loads survey definitions from YAML/JSON files

Authoring-time checks:
    validate_logic                — self/unknown references, bad jumps, cycles
    validate_piping               — self/forward/unknown piping references
    detect_circular_dependencies  — first logic cycle between questions
"""

from survey_logic.engine import SurveyEngine
from survey_logic.evaluator import ConditionEvaluator, condition_matches
from survey_logic.models.evaluation import (
    PipingContext,
    RenderedQuestion,
    SurveyEvaluation,
    VisibilityDecision,
)
from survey_logic.models.question import Question, QuestionLogic, Survey
from survey_logic.piping import (
    PipingEngine,
    apply_piping,
    extract_placeholders,
    format_answer,
    has_piping,
)
from survey_logic.store import SurveyStore
from survey_logic.validation import (
    detect_circular_dependencies,
    validate_logic,
    validate_piping,
)
from survey_logic.visibility import VisibilityResolver, is_visible, resolve_visibility

__version__ = "0.1.0"

__all__ = [
    # Core functions
    "apply_piping",
    "condition_matches",
    "is_visible",
    "resolve_visibility",
    # Engine & store
    "ConditionEvaluator",
    "PipingEngine",
    "SurveyEngine",
    "SurveyStore",
    "VisibilityResolver",
    # Models
    "PipingContext",
    "Question",
    "QuestionLogic",
    "RenderedQuestion",
    "Survey",
    "SurveyEvaluation",
    "VisibilityDecision",
    # Piping helpers
    "extract_placeholders",
    "format_answer",
    "has_piping",
    # Validation
    "detect_circular_dependencies",
    "validate_logic",
    "validate_piping",
]
