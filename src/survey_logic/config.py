"""SDK configuration — reads settings from environment variables.

All settings have sensible defaults for local development.  The CLI
calls :func:`load_settings` once at startup; library callers may build a
``Settings`` directly.
"""

import os
from dataclasses import dataclass

from survey_logic.constants import NO_ANSWER_TEXT


@dataclass(frozen=True)
class Settings:
    """Immutable SDK configuration read from environment at startup."""

    # Directory of survey definition files (None → SurveyStore default,
    # which is surveys/ from repo root)
    survey_dir: str | None = None

    # Logging
    log_level: str = "INFO"

    # Text piped in place of a missing answer
    no_answer_text: str = NO_ANSWER_TEXT


def load_settings() -> Settings:
    """Build settings from ``SURVEY_LOGIC_*`` environment variables."""
    return Settings(
        survey_dir=os.getenv("SURVEY_LOGIC_SURVEY_DIR") or None,
        log_level=os.getenv("SURVEY_LOGIC_LOG_LEVEL", "INFO").upper(),
        no_answer_text=os.getenv("SURVEY_LOGIC_NO_ANSWER_TEXT", NO_ANSWER_TEXT),
    )
