"""SurveyStore — loads survey definitions from a directory into typed models.

Each ``*.yaml``, ``*.yml``, or ``*.json`` file holds one survey.  A file
without an ``id`` takes its stem as the survey id.

Usage::

    store = SurveyStore()           # defaults to surveys/ relative to repo root
    store.load()                    # parse every definition file

    survey = store.get("customer_feedback")
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from survey_logic.constants import SURVEY_FILE_SUFFIXES
from survey_logic.models.question import Survey

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Utility helpers
# ---------------------------------------------------------------------------

def find_repo_root(start: Optional[Path] = None) -> Path:
    """Walk upwards from *start* to find the repo root (dir with pyproject.toml or .git).

    Falls back to cwd if no marker is found.
    """
    p = (start or Path(__file__).resolve()).parent
    for parent in [p, *p.parents]:
        if (parent / "pyproject.toml").exists() or (parent / ".git").exists():
            return parent
    return Path.cwd()


def load_definition(path: Path | str) -> Any:
    """Load a single YAML or JSON file and return the parsed contents.

    Raises ``FileNotFoundError`` if the file is missing and ``ValueError``
    naming the file if it does not parse.
    """
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing survey file: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            if path.suffix == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ValueError(f"Invalid survey file {path}: {exc}") from exc


def parse_survey(raw: Any, *, source: str = "<memory>", default_id: str | None = None) -> Survey:
    """Validate a raw survey dict, raising ``ValueError`` that names *source*."""
    if not isinstance(raw, dict):
        raise ValueError(f"Survey definition in {source} must be a mapping")
    if default_id is not None and "id" not in raw:
        raw = {**raw, "id": default_id}
    try:
        return Survey.model_validate(raw)
    except ValidationError as exc:
        raise ValueError(f"Invalid survey definition in {source}: {exc}") from exc


def load_survey(path: Path | str) -> Survey:
    """Load and validate one survey definition file."""
    path = Path(path)
    return parse_survey(load_definition(path), source=str(path), default_id=path.stem)


# ---------------------------------------------------------------------------
# SurveyStore
# ---------------------------------------------------------------------------

class SurveyStore:
    """Loads every survey definition under a directory and provides lookup.

    Attributes populated after :meth:`load`:

        surveys — dict[survey_id, Survey], in file-name order
    """

    def __init__(self, survey_dir: str | Path | None = None) -> None:
        if survey_dir is None:
            survey_dir = find_repo_root() / "surveys"
        self._base = Path(survey_dir)

        # Populated by load()
        self.surveys: dict[str, Survey] = {}

    def load(self) -> None:
        """Parse all definition files in the survey directory.

        Raises ``FileNotFoundError`` if the directory is missing and
        ``ValueError`` for an invalid definition or a duplicate survey id.
        """
        if not self._base.is_dir():
            raise FileNotFoundError(f"Missing survey directory: {self._base}")

        surveys: dict[str, Survey] = {}
        for path in sorted(self._base.iterdir()):
            if path.suffix not in SURVEY_FILE_SUFFIXES:
                continue
            survey = load_survey(path)
            if survey.id in surveys:
                raise ValueError(f"Duplicate survey id {survey.id!r} in {path}")
            surveys[survey.id] = survey

        self.surveys = surveys
        logger.info("SurveyStore loaded %d survey(s) from %s", len(surveys), self._base)

    def get(self, survey_id: str) -> Survey:
        """Look up a survey by id.

        Raises:
            KeyError: if the survey is not loaded.
        """
        return self.surveys[survey_id]

    def list_ids(self) -> list[str]:
        """Return loaded survey ids in load order."""
        return list(self.surveys)
