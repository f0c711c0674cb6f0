"""Per-question processors that run on an already parsed Questionnaire."""

from __future__ import annotations

import logging
from typing import Optional

from pipeline import ExecutionContext, GenerativeStep, Outcome, TextBackendLike

from ..core.models import Question, Questionnaire, QuestionType
from .parse import QUESTIONNAIRE_KEY

logger = logging.getLogger(__name__)


class QuestionProcessingStep(GenerativeStep):
    """Base for steps that handle every question of one type.

    Reads the ``Questionnaire`` stored under ``"Questionnaire"``. If there is
    none, logs and returns ``Outcome.empty()`` without writing a result.
    Otherwise calls ``handle_question`` for each matching question, in
    order, and writes ``summary`` to ``"<name>_Result"``.

    Subclasses set ``question_type`` and ``summary`` and may override
    ``handle_question``.  The backend is optional: the default handler does
    not call it.
    """

    question_type: QuestionType
    summary: str
    requires = frozenset({QUESTIONNAIRE_KEY})

    def __init__(
        self,
        backend: Optional[TextBackendLike] = None,
        system_prompt: str = "",
        *,
        name: str,
        description: str = "",
    ) -> None:
        super().__init__(backend, system_prompt, name=name, description=description)

    async def handle_question(self, question: Question, ctx: ExecutionContext) -> None:
        """Hook for real per-question work.  No-op by default."""

    async def execute(self, ctx: ExecutionContext) -> Outcome:
        questionnaire = ctx.get_as(QUESTIONNAIRE_KEY, Questionnaire)
        if questionnaire is None:
            logger.warning("%s: no questionnaire in context, skipping", self.name)
            return Outcome.empty()

        matching = questionnaire.of_type(self.question_type)
        for question in matching:
            await self.handle_question(question, ctx)

        ctx.set(self.result_key, self.summary)
        logger.info(
            "%s: handled %d %s question(s)",
            self.name,
            len(matching),
            self.question_type.value,
        )
        return Outcome.ok(self.summary)


class OpenEndedProcessorStep(QuestionProcessingStep):
    question_type = QuestionType.OPEN_ENDED
    summary = "Open-ended questions processed."

    def __init__(
        self,
        backend: Optional[TextBackendLike] = None,
        system_prompt: str = "",
        *,
        name: str = "OpenEndedProcessor",
        description: str = "Handle open-ended questions",
    ) -> None:
        super().__init__(backend, system_prompt, name=name, description=description)


class MultipleChoiceProcessorStep(QuestionProcessingStep):
    question_type = QuestionType.MULTIPLE_CHOICE
    summary = "Multiple-choice questions processed."

    def __init__(
        self,
        backend: Optional[TextBackendLike] = None,
        system_prompt: str = "",
        *,
        name: str = "MultipleChoiceProcessor",
        description: str = "Handle multiple-choice questions",
    ) -> None:
        super().__init__(backend, system_prompt, name=name, description=description)
