"""Constants shared across the survey logic SDK.

These values are referenced by the evaluator, the piping engine, the
survey store, and the CLI.

The no-answer text can be overridden via an environment variable so that
deployments can show e.g. ``[no answer]`` in piped prompts without code
changes.
"""

import os

# Operators that test emptiness and therefore carry no comparison value.
EMPTINESS_OPERATORS: frozenset[str] = frozenset({"is_empty", "is_not_empty"})

# Ordering operators that compare both operands as numbers.
NUMERIC_OPERATORS: frozenset[str] = frozenset({
    "greater_than",
    "less_than",
    "greater_than_or_equal",
    "less_than_or_equal",
})

# Substituted for a piped reference whose answer is missing or empty.
# Overridable via SURVEY_LOGIC_NO_ANSWER_TEXT.
NO_ANSWER_TEXT = os.getenv("SURVEY_LOGIC_NO_ANSWER_TEXT", "")

# Separator used when piping a multiple-choice answer into text.
LIST_SEPARATOR = ", "

# File suffixes the survey store picks up from its directory.
SURVEY_FILE_SUFFIXES: tuple[str, ...] = (".yaml", ".yml", ".json")
