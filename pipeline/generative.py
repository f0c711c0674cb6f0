"""GenerativeStep — calls the text backend with a fixed prompt."""

from __future__ import annotations

import logging

from .context import ABSENT, ExecutionContext, result_key
from .errors import BackendFailure
from .protocol import Outcome, TextBackendLike

logger = logging.getLogger(__name__)


class GenerativeStep:
    """Invoke the backend with ``system_prompt`` and record the response.

    Writes the response text to ``"<name>_Result"``. When the backend comes
    back empty or failed, the same key is set to ``ABSENT`` so downstream
    steps can tell "ran but produced nothing" from "never ran".

    Backend failures never cross the step boundary: they are returned as
    ``Outcome.failed`` and logged.
    """

    requires: frozenset[str] = frozenset()

    def __init__(
        self,
        backend: TextBackendLike,
        system_prompt: str,
        *,
        name: str = "Agent",
        description: str = "",
    ) -> None:
        self.backend = backend
        self.system_prompt = system_prompt
        self.name = name
        self.description = description
        self.provides: frozenset[str] = frozenset({self.result_key})

    @property
    def result_key(self) -> str:
        return result_key(self.name)

    async def execute(self, ctx: ExecutionContext) -> Outcome:
        logger.debug("%s: requesting generation", self.name)
        try:
            outcome = await self.backend.generate(self.system_prompt)
        except Exception as exc:
            logger.exception("%s: backend raised unexpectedly", self.name)
            outcome = Outcome.failed(BackendFailure(str(exc)))

        if outcome.is_ok and isinstance(outcome.value, str) and outcome.value.strip():
            ctx.set(self.result_key, outcome.value)
            return outcome

        if outcome.is_failed:
            logger.error("%s: backend failed: %s", self.name, outcome.reason)
        else:
            logger.warning("%s: backend returned no text", self.name)
            outcome = Outcome.empty()
        ctx.set(self.result_key, ABSENT)
        return outcome

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
