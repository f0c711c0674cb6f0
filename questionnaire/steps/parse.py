"""QuestionnaireParserStep — turns validated text into a Questionnaire record."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from pipeline import ExecutionContext, Outcome, WiringError, result_key

from ..core.models import Questionnaire

logger = logging.getLogger(__name__)

QUESTIONNAIRE_KEY = "Questionnaire"


class QuestionnaireParserStep:
    """Parse ``ctx[source_key]`` into a ``Questionnaire`` under ``"Questionnaire"``.

    Non-fatal: a missing source or text that does not match the wire format
    is logged and reported as ``Outcome.failed`` without writing anything.
    """

    def __init__(
        self,
        source_key: str = "Tool_Result",
        *,
        name: str = "QuestionnaireParser",
        description: str = "Parse validated JSON into a Questionnaire",
    ) -> None:
        self.source_key = source_key
        self.name = name
        self.description = description
        self.requires = frozenset({source_key})
        self.provides = frozenset({QUESTIONNAIRE_KEY, result_key(name)})

    async def execute(self, ctx: ExecutionContext) -> Outcome:
        text = ctx.get_text(self.source_key)
        if text is None:
            error = WiringError(self.source_key, self.name)
            logger.warning("%s", error)
            return Outcome.failed(error)

        try:
            questionnaire = Questionnaire.from_json(text)
        except ValidationError as exc:
            logger.warning("%s: text is not a questionnaire: %s", self.name, exc)
            return Outcome.failed(exc)

        ctx.set(QUESTIONNAIRE_KEY, questionnaire)
        summary = f"Parsed {len(questionnaire.questions)} question(s)"
        ctx.set(result_key(self.name), summary)
        logger.info("%s: %s", self.name, summary)
        return Outcome.ok(questionnaire)
