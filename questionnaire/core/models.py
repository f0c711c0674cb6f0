"""Questionnaire records parsed from model output."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class QuestionType(str, Enum):
    """Type tag carried by every question on the wire."""

    YES_NO = "YesNo"
    MULTIPLE_CHOICE = "MultipleChoice"
    OPEN_ENDED = "OpenEnded"


class Question(BaseModel):
    """A single questionnaire entry.

    ``options`` is only expected for ``MultipleChoice`` questions, but the
    parse is deliberately permissive: a multiple-choice question without
    options, or options on another type, is accepted as-is.
    """

    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(..., alias="QuestionText", description="Prompt shown to the patient")
    question_type: QuestionType = Field(..., alias="QuestionType")
    options: Optional[List[str]] = Field(
        default=None, alias="Options", description="Choice labels, in order"
    )


class Questionnaire(BaseModel):
    """Ordered list of questions.

    Wire format::

        {"Questions": [{"QuestionText": "...", "QuestionType": "YesNo"}]}

    A document without ``"Questions"`` parses as an empty questionnaire.
    """

    model_config = ConfigDict(populate_by_name=True)

    questions: List[Question] = Field(default_factory=list, alias="Questions")

    @classmethod
    def from_json(cls, text: str) -> "Questionnaire":
        """Parse wire-format JSON; raises ``pydantic.ValidationError``."""
        return cls.model_validate_json(text)

    def to_json(self, indent: int | None = None) -> str:
        """Serialise to wire-format JSON, omitting absent ``Options``."""
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)

    def of_type(self, question_type: QuestionType) -> List[Question]:
        """Questions carrying *question_type*, in questionnaire order."""
        return [q for q in self.questions if q.question_type is question_type]
