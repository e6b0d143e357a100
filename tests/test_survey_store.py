"""SurveyStore loading and lookup tests.

The session-scoped ``store`` fixture loads the example definitions under
``surveys/``:
    customer_feedback.yaml — 7 questions, compound and jump rules
    follow_up.json         — 3 questions, yes/no branching
"""

import json

import pytest

from survey_logic.models.action import JumpAction
from survey_logic.models.question import CompoundCondition
from survey_logic.store import SurveyStore, load_survey, parse_survey
from survey_logic.validation import validate_logic, validate_piping


# =====================================================================
# Example surveys
# =====================================================================


def test_store_loads_example_surveys(store):
    assert store.list_ids() == ["customer_feedback", "follow_up"]


def test_customer_feedback_structure(store):
    s = store.get("customer_feedback")
    assert len(s.questions) == 7
    assert s.question_order[0] == "q_name"

    why_not = s.get_question("q_why_not")
    assert [r.id for r in why_not.logic.rules] == ["r_show_unhappy", "r_hide_otherwise"]
    assert isinstance(why_not.logic.rules[1].condition, CompoundCondition)

    follow_up = s.get_question("q_follow_up")
    assert isinstance(follow_up.logic.rules[0].action, JumpAction)
    assert follow_up.logic.rules[0].action.target_question_id == "q_email"


def test_yaml_keeps_yes_no_as_strings(store):
    s = store.get("customer_feedback")
    assert s.get_question("q_recommend").options == ["Yes", "No"]
    cond = s.get_question("q_why_not").logic.rules[0].condition
    assert cond.value == "No"


@pytest.mark.parametrize("survey_id", ["customer_feedback", "follow_up"])
def test_example_surveys_are_valid(store, survey_id):
    s = store.get(survey_id)
    assert validate_logic(s) == []
    assert validate_piping(s.questions).valid


def test_customer_feedback_walkthrough(store, engine):
    """Unhappy path: follow-up question appears, low rating hides praise and jumps."""
    s = store.get("customer_feedback")

    result = engine.evaluate(s, {})
    assert "q_why_not" not in result.visible_ids

    answers = {"q_name": "Sam", "q_recommend": "No", "q_rating": 2}
    result = engine.evaluate(s, answers)
    assert result.visible_ids == ["q_name", "q_recommend", "q_why_not", "q_rating", "q_email"]
    assert result.questions[1].question == "Thanks Sam! Would you recommend us to a friend?"
    assert result.questions[2].question == "Sorry to hear that, Sam. What could we do better?"
    assert result.jumps == {"q_follow_up": "q_email"}

    answers = {"q_name": "Sam", "q_recommend": "Yes", "q_rating": 5, "q_praise": ["Staff", "Price"]}
    result = engine.evaluate(s, answers)
    assert "q_why_not" not in result.visible_ids
    follow_up = next(q for q in result.questions if q.id == "q_follow_up")
    assert follow_up.question == "You enjoyed: Staff, Price. Anything else you'd like to share?"


def test_unknown_survey_raises_key_error(store):
    with pytest.raises(KeyError):
        store.get("nope")


# =====================================================================
# Loading from disk
# =====================================================================


def test_missing_directory(tmp_path):
    store = SurveyStore(tmp_path / "missing")
    with pytest.raises(FileNotFoundError):
        store.load()


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_survey(tmp_path / "absent.yaml")


def test_id_defaults_to_file_stem(tmp_path):
    (tmp_path / "intake.json").write_text(json.dumps({
        "questions": [{"id": "q1", "type": "short_text", "question": "Hi"}],
    }))
    (tmp_path / "notes.txt").write_text("ignored")
    store = SurveyStore(tmp_path)
    store.load()
    assert store.list_ids() == ["intake"]


def test_invalid_definition_names_file(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("id: broken\nquestions:\n  - id: q1\n    type: hologram\n")
    with pytest.raises(ValueError, match="broken.yaml"):
        SurveyStore(tmp_path).load()


def test_duplicate_question_ids_rejected():
    with pytest.raises(ValueError, match="duplicate question id"):
        parse_survey({"id": "s", "questions": [
            {"id": "q1", "type": "short_text"},
            {"id": "q1", "type": "number"},
        ]})


def test_duplicate_survey_ids_rejected(tmp_path):
    for name in ("a.yaml", "b.yaml"):
        (tmp_path / name).write_text("id: same\nquestions: []\n")
    with pytest.raises(ValueError, match="Duplicate survey id"):
        SurveyStore(tmp_path).load()


def test_non_mapping_definition(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ValueError, match="must be a mapping"):
        load_survey(path)


def test_yaml_syntax_error_names_file(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("id: x\nquestions: [\n")
    with pytest.raises(ValueError, match="Invalid survey file .*bad.yaml"):
        load_survey(path)


def test_json_syntax_error_names_file(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{\"id\": \"x\",")
    with pytest.raises(ValueError, match="Invalid survey file .*bad.json"):
        load_survey(path)


def test_malformed_rule_does_not_fail_load(tmp_path):
    path = tmp_path / "lenient.yaml"
    path.write_text(
        "id: lenient\n"
        "questions:\n"
        "  - id: q1\n"
        "    type: short_text\n"
        "  - id: q2\n"
        "    type: short_text\n"
        "    logic:\n"
        "      rules:\n"
        "        - id: bad\n"
        "          condition: {questionId: q1, operator: sounds_like, value: x}\n"
        "          action: {type: hide}\n"
        "        - id: good\n"
        "          condition: {questionId: q1, operator: is_empty}\n"
        "          action: {type: hide}\n"
    )
    s = load_survey(path)
    assert [r.id for r in s.get_question("q2").logic.rules] == ["good"]
