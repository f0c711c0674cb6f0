"""Medical questionnaire generation on top of the ``pipeline`` engine."""

from .config import Settings, load_settings
from .core import Question, Questionnaire, QuestionType
from .prompts import QUESTIONNAIRE_SYSTEM_PROMPT
from .providers import LiteLLMClient, LiteLLMConfig
from .runner import PROCESS_FLAG, build_questionnaire_pipeline, generate_questionnaire
from .steps import (
    QUESTIONNAIRE_KEY,
    MultipleChoiceProcessorStep,
    OpenEndedProcessorStep,
    QuestionnaireParserStep,
    QuestionProcessingStep,
)

__all__ = [
    "LiteLLMClient",
    "LiteLLMConfig",
    "MultipleChoiceProcessorStep",
    "OpenEndedProcessorStep",
    "PROCESS_FLAG",
    "QUESTIONNAIRE_KEY",
    "QUESTIONNAIRE_SYSTEM_PROMPT",
    "Question",
    "QuestionProcessingStep",
    "Questionnaire",
    "QuestionnaireParserStep",
    "QuestionType",
    "Settings",
    "build_questionnaire_pipeline",
    "generate_questionnaire",
    "load_settings",
]
