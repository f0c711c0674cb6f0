"""Caller-facing wiring of the questionnaire pipeline."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from pipeline import (
    GenerativeStep,
    PipelineBuilder,
    TextBackendLike,
    ValidationRetryStep,
    flag_is_set,
)

from .core.models import Questionnaire
from .prompts import QUESTIONNAIRE_SYSTEM_PROMPT
from .steps import (
    QUESTIONNAIRE_KEY,
    MultipleChoiceProcessorStep,
    OpenEndedProcessorStep,
    QuestionnaireParserStep,
)

logger = logging.getLogger(__name__)

PROCESS_FLAG = "ProcessQuestions"


def build_questionnaire_pipeline(
    backend: TextBackendLike,
    *,
    prompt: str = QUESTIONNAIRE_SYSTEM_PROMPT,
    max_attempts: int = 3,
    process_flag: str = PROCESS_FLAG,
) -> PipelineBuilder:
    """Return a builder for the standard questionnaire pipeline.

    Steps, in order:

    1. ``Agent`` — generate questionnaire JSON from *prompt*.
    2. ``Tool`` — check ``Agent_Result`` parses, re-running ``Agent`` up to
       *max_attempts* times.
    3. ``QuestionnaireParser`` — parse ``Tool_Result`` into a record.
    4. ``Conditional`` — when ``ctx[process_flag] is True``, run the
       open-ended and multiple-choice processors.
    """
    agent = GenerativeStep(
        backend,
        prompt,
        name="Agent",
        description="Generate questionnaire JSON",
    )
    validator = ValidationRetryStep(
        agent.result_key,
        agent,
        max_attempts=max_attempts,
        name="Tool",
        description="Ensure the generated questionnaire is valid JSON",
    )
    processors = (
        PipelineBuilder()
        .tool(OpenEndedProcessorStep())
        .tool(MultipleChoiceProcessorStep())
    )
    return (
        PipelineBuilder()
        .agent(agent)
        .tool(validator)
        .tool(QuestionnaireParserStep(validator.result_key))
        .conditional(
            flag_is_set(process_flag),
            processors,
            name="ProcessQuestions",
            requires={process_flag},
        )
    )


async def generate_questionnaire(
    backend: TextBackendLike,
    *,
    initial: Optional[Mapping[str, Any]] = None,
    **kwargs: Any,
) -> Optional[Questionnaire]:
    """Run the standard pipeline and return the parsed questionnaire.

    Returns ``None`` when generation succeeded structurally but the text is
    not a questionnaire, or when the agent produced nothing.  Raises
    ``ValidationExhausted`` when no attempt produced parseable JSON.
    """
    ctx = await build_questionnaire_pipeline(backend, **kwargs).execute_async(initial)
    questionnaire = ctx.get_as(QUESTIONNAIRE_KEY, Questionnaire)
    if questionnaire is None:
        logger.warning("Pipeline finished without a questionnaire")
    return questionnaire
