"""Questionnaire pipeline steps — one concern per file."""

from __future__ import annotations

from .parse import QUESTIONNAIRE_KEY, QuestionnaireParserStep
from .processors import (
    MultipleChoiceProcessorStep,
    OpenEndedProcessorStep,
    QuestionProcessingStep,
)

__all__ = [
    "QUESTIONNAIRE_KEY",
    "MultipleChoiceProcessorStep",
    "OpenEndedProcessorStep",
    "QuestionnaireParserStep",
    "QuestionProcessingStep",
]
