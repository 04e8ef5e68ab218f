"""
Typed shapes for intake forms and their responses.

Raw payloads from a form store are coerced into these models by
intake.parse_forms before anything else touches them.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field


class MalformedInput(ValueError):
    """A form or response payload could not be coerced into the data model."""


class QuestionKind(str, Enum):
    SHORT_TEXT = "SHORT_TEXT"
    LONG_TEXT = "LONG_TEXT"
    SINGLE_CHOICE = "SINGLE_CHOICE"
    DATE = "DATE"


class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    title: str = ""
    kind: QuestionKind = QuestionKind.SHORT_TEXT
    required: bool = False
    options: List[str] = Field(default_factory=list)


class Form(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    title: str = "Untitled Form"
    description: str = ""
    published_url: str = ""
    edit_url: str = ""
    questions: List[Question] = Field(default_factory=list)


class TextValue(BaseModel):
    """First text value of an answer."""
    model_config = ConfigDict(frozen=True)

    value: str


class FileNames(BaseModel):
    """Uploaded file names of an answer, in upload order."""
    model_config = ConfigDict(frozen=True)

    names: List[str]


RawAnswer = Union[TextValue, FileNames]


class RawResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    submitted_at: datetime
    answers: Dict[str, RawAnswer] = Field(default_factory=dict)


class NormalizedResponse(BaseModel):
    id: str
    submitted_at: datetime
    # question title -> display string, in form question order
    fields: Dict[str, str] = Field(default_factory=dict)
    is_expiring_soon: bool = False
