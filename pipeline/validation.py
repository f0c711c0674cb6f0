"""ValidationRetryStep — structural check with bounded re-generation.

The step reads text from a target context key and runs a syntax-only check
on it (by default: does it parse as JSON). When the check fails, the bound
upstream ``GenerativeStep`` is re-run against the same context and its fresh
result replaces the target value for the next attempt.

The loop is capped at ``max_attempts`` checks. If every check fails the step
raises ``ValidationExhausted``, which ends the whole run. A missing or
non-text target is a wiring problem rather than a validation failure: the
step logs it and returns ``Outcome.failed(WiringError)`` without raising.
"""

from __future__ import annotations

import json
import logging
from typing import Callable

from .context import ABSENT, ExecutionContext, result_key
from .errors import PipelineConfigError, ValidationExhausted, WiringError
from .generative import GenerativeStep
from .protocol import Outcome

logger = logging.getLogger(__name__)


def is_structured_document(text: str) -> bool:
    """Return True if *text* parses as a JSON document of any shape."""
    try:
        json.loads(text)
    except (ValueError, RecursionError):
        return False
    return True


class ValidationRetryStep:
    """Validate ``ctx[target_key]``, re-invoking *upstream* until it parses."""

    def __init__(
        self,
        target_key: str,
        upstream: GenerativeStep,
        *,
        max_attempts: int = 3,
        name: str = "Tool",
        description: str = "",
        check: Callable[[str], bool] = is_structured_document,
    ) -> None:
        if max_attempts < 1:
            raise PipelineConfigError(
                f"max_attempts must be at least 1, got {max_attempts}"
            )
        self.target_key = target_key
        self.upstream = upstream
        self.max_attempts = max_attempts
        self.name = name
        self.description = description
        self.check = check

        self.requires: frozenset[str] = frozenset({target_key})
        # Retries overwrite the upstream's own result key as well as the target.
        self.provides: frozenset[str] = frozenset(
            {self.result_key, target_key, upstream.result_key}
        )

    @property
    def result_key(self) -> str:
        return result_key(self.name)

    async def execute(self, ctx: ExecutionContext) -> Outcome:
        attempts = 0

        while attempts < self.max_attempts:
            attempts += 1

            text = ctx.get_text(self.target_key)
            if text is None:
                error = WiringError(self.target_key, self.name)
                logger.error("%s", error)
                return Outcome.failed(error)

            if self.check(text):
                ctx.set(self.result_key, text)
                logger.info(
                    "%s: %r valid on attempt %d/%d",
                    self.name,
                    self.target_key,
                    attempts,
                    self.max_attempts,
                )
                return Outcome.ok(text)

            logger.warning(
                "%s: %r failed structural check (attempt %d/%d), re-running %s",
                self.name,
                self.target_key,
                attempts,
                self.max_attempts,
                self.upstream.name,
            )
            await self.upstream.execute(ctx)
            retried = ctx.get_text(self.upstream.result_key)
            ctx.set(self.target_key, retried if retried is not None else ABSENT)

        raise ValidationExhausted(attempts=attempts, step_name=self.name)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, "
            f"target_key={self.target_key!r}, max_attempts={self.max_attempts})"
        )
