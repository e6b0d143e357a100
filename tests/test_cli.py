"""CLI tests — drive ``survey_logic.cli.main`` with argv lists."""

import json
from pathlib import Path

import pytest

from survey_logic.cli import main

SURVEY_DIR = Path(__file__).resolve().parent.parent / "surveys"


@pytest.fixture(autouse=True)
def _survey_dir(monkeypatch):
    """Point the CLI at the example surveys regardless of cwd."""
    monkeypatch.setenv("SURVEY_LOGIC_SURVEY_DIR", str(SURVEY_DIR))
    monkeypatch.delenv("SURVEY_LOGIC_NO_ANSWER_TEXT", raising=False)


def test_list(capsys):
    assert main(["list"]) == 0
    out = capsys.readouterr().out
    assert "customer_feedback\t7 questions\tCustomer Feedback" in out
    assert "follow_up\t3 questions" in out


def test_evaluate_by_id_inline_answers(capsys):
    assert main(["evaluate", "follow_up", "--answers-json", '{"q1": "No"}']) == 0
    payload = json.loads(capsys.readouterr().out)
    assert [q["id"] for q in payload["questions"]] == ["q1", "q3"]
    assert payload["hidden"] == ["q2"]
    assert payload["questions"][1]["question"] == "Following up on your answer: No"
    assert payload["answered"] == 1
    assert payload["total"] == 2
    assert payload["progress"] == 50.0


def test_evaluate_by_path_answers_file(tmp_path, capsys):
    answers = tmp_path / "answers.json"
    answers.write_text(json.dumps({"q1": "Yes"}))
    assert main(["evaluate", str(SURVEY_DIR / "follow_up.json"), "--answers", str(answers)]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert [q["id"] for q in payload["questions"]] == ["q1", "q2", "q3"]


def test_evaluate_no_answer_text_from_env(monkeypatch, capsys):
    monkeypatch.setenv("SURVEY_LOGIC_NO_ANSWER_TEXT", "[no answer]")
    assert main(["evaluate", "follow_up"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["questions"][-1]["question"] == "Following up on your answer: [no answer]"


def test_validate_clean(capsys):
    assert main(["validate", "customer_feedback"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload == {"survey_id": "customer_feedback", "logic": [], "piping": []}


def test_validate_reports_issues(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"id": "bad", "questions": [
        {"id": "q1", "type": "short_text", "question": "See {{q2}}"},
        {"id": "q2", "type": "short_text", "logic": {"rules": [
            {"id": "r1", "condition": {"questionId": "q2", "operator": "is_empty"},
             "action": {"type": "hide"}},
        ]}},
    ]}))
    assert main(["validate", str(path)]) == 1
    payload = json.loads(capsys.readouterr().out)
    assert [i["kind"] for i in payload["logic"]] == ["self_reference"]
    assert [i["placeholder"] for i in payload["piping"]] == ["q2"]


def test_unknown_survey_exit_code(capsys):
    assert main(["evaluate", "does_not_exist"]) == 2
    assert "unknown survey 'does_not_exist'" in capsys.readouterr().err


def test_internal_key_error_is_not_reported_as_unknown_survey(monkeypatch):
    def _broken(survey):
        raise KeyError("q1")

    monkeypatch.setattr("survey_logic.cli.validate_logic", _broken)
    with pytest.raises(KeyError):
        main(["validate", "follow_up"])


def test_missing_file_exit_code(tmp_path, capsys):
    assert main(["validate", str(tmp_path / "missing.yaml")]) == 2
    assert "Missing survey file" in capsys.readouterr().err


def test_unparseable_survey_file_exit_code(tmp_path, capsys):
    path = tmp_path / "bad.yaml"
    path.write_text("id: x\nquestions: [\n")
    assert main(["validate", str(path)]) == 2
    assert "Invalid survey file" in capsys.readouterr().err


def test_bad_answers_json_exit_code(capsys):
    assert main(["evaluate", "follow_up", "--answers-json", "[1, 2]"]) == 2
    assert "JSON object" in capsys.readouterr().err


def test_survey_dir_flag_overrides_env(tmp_path, capsys):
    assert main(["--survey-dir", str(tmp_path), "list"]) == 0
    assert capsys.readouterr().out == ""
