# fakeout/commands.py
from __future__ import annotations
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from .errors import MalformedCommand

class _TextCommand(BaseModel):
    # numeric room pins read as text, null reads as blank
    model_config = ConfigDict(coerce_numbers_to_str=True, populate_by_name=True)

    @field_validator("room", "nickname", "answer", "answer_id", mode="before", check_fields=False)
    @classmethod
    def blank_if_none(cls, value):
        return "" if value is None else value

class Join(_TextCommand):
    type: Literal["join"]
    room: str = ""
    nickname: str = ""

class StartGame(BaseModel):
    type: Literal["start_game"]

class SubmitAnswer(_TextCommand):
    type: Literal["submit_answer"]
    answer: str = ""

class NextAnswer(BaseModel):
    type: Literal["next_answer"]

class SubmitVote(_TextCommand):
    type: Literal["submit_vote"]
    answer_id: str = Field("", alias="answerId")

class NextResult(BaseModel):
    type: Literal["next_result"]

class NewRound(BaseModel):
    type: Literal["new_round"]

class ResetGame(BaseModel):
    type: Literal["reset_game"]

Command = Annotated[
    Union[Join, StartGame, SubmitAnswer, NextAnswer, SubmitVote, NextResult, NewRound, ResetGame],
    Field(discriminator="type"),
]

_adapter = TypeAdapter(Command)

def parse_command(raw) -> Command:
    """Decode one inbound frame (str or bytes) into a command."""
    try:
        return _adapter.validate_json(raw)
    except ValidationError as e:
        raise MalformedCommand(str(e)) from e
