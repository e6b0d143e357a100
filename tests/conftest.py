from pathlib import Path

import pytest

from survey_logic.engine import SurveyEngine
from survey_logic.evaluator import ConditionEvaluator
from survey_logic.piping import PipingEngine
from survey_logic.store import SurveyStore
from survey_logic.visibility import VisibilityResolver

SURVEY_DIR = Path(__file__).resolve().parent.parent / "surveys"


@pytest.fixture
def evaluator():
    """Fresh ConditionEvaluator for each test."""
    return ConditionEvaluator()


@pytest.fixture
def resolver():
    return VisibilityResolver()


@pytest.fixture
def piping():
    return PipingEngine()


@pytest.fixture
def engine():
    return SurveyEngine()


@pytest.fixture(scope="session")
def store():
    """Load the example surveys once for the entire test session."""
    s = SurveyStore(SURVEY_DIR)
    s.load()
    return s
