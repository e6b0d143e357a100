"""Action models for question logic rules.

An action defines what happens to the owning question when its rule's
condition matches:
  - ShowAction: the question is visible
  - HideAction: the question is hidden
  - JumpAction: the question is hidden and the form should branch to
    ``target_question_id`` (surfaced to the host as a hint)

The discriminated ``Action`` union uses the ``type`` field as its
discriminator so Pydantic can deserialise stored logic JSON directly into
the correct type.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class ShowAction(BaseModel):
    """Show the owning question."""

    type: Literal["show"] = "show"


class HideAction(BaseModel):
    """Hide the owning question."""

    type: Literal["hide"] = "hide"


class JumpAction(BaseModel):
    """Branch to another question; the owning question is not rendered inline."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["jump"] = "jump"
    target_question_id: str = Field(alias="targetQuestionId", min_length=1)


# Discriminated union: Pydantic picks the right type based on the "type" field.
Action = Annotated[Union[ShowAction, HideAction, JumpAction], Field(discriminator="type")]

ActionType = Literal["show", "hide", "jump"]
