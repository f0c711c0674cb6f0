"""Pipeline and PipelineBuilder — assemble steps, then run them in order."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping
from typing import Any, Union

from .conditional import ConditionalStep, Predicate
from .context import ExecutionContext
from .errors import PipelineConfigError
from .generative import GenerativeStep
from .protocol import Outcome, StepProtocol
from .sequence import SequenceStep, infer_contracts, run_steps, validate_order

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class Pipeline:
    """Immutable, ordered snapshot of steps.  Satisfies StepProtocol.

    Produced by ``PipelineBuilder.build()``.  ``requires`` and ``provides``
    are inferred from the step chain, so a ``Pipeline`` can itself be placed
    inside another pipeline.

    Run it with::

        ctx = await pipe.run_async({"ProcessQuestions": True})
        text = ctx.get_text("Tool_Result")
    """

    def __init__(
        self,
        steps: Iterable = (),
        *,
        name: str = "Pipeline",
        description: str = "",
    ) -> None:
        self._steps: tuple = tuple(steps)
        validate_order(self._steps)
        self.name = name
        self.description = description
        self.requires, self.provides = infer_contracts(self._steps)

    @property
    def steps(self) -> tuple:
        return self._steps

    async def execute(self, ctx: ExecutionContext) -> Outcome:
        """Run every step on an existing context (nested-step mode)."""
        return await run_steps(self._steps, ctx)

    async def run_async(
        self, initial: Mapping[str, Any] | None = None
    ) -> ExecutionContext:
        """Create a fresh context, seeded with *initial*, and run all steps.

        ``ValidationExhausted`` propagates to the caller unchanged; nothing
        after the failing step runs.
        """
        ctx = ExecutionContext(initial)
        logger.debug("%s: starting run with %d step(s)", self.name, len(self._steps))
        await run_steps(self._steps, ctx)
        return ctx

    def run(self, initial: Mapping[str, Any] | None = None) -> ExecutionContext:
        """Sync entry point; use ``run_async`` from coroutine contexts."""
        return asyncio.run(self.run_async(initial))

    def __len__(self) -> int:
        return len(self._steps)

    def __repr__(self) -> str:
        return f"Pipeline(name={self.name!r}, steps={len(self._steps)})"


# ---------------------------------------------------------------------------
# PipelineBuilder
# ---------------------------------------------------------------------------

StepsLike = Union["PipelineBuilder", Iterable]


class PipelineBuilder:
    """Fluent accumulator of steps.

    Build a pipeline::

        pipe = (
            PipelineBuilder()
            .agent(agent)
            .tool(ValidationRetryStep("Agent_Result", agent))
            .conditional(
                flag_is_set("ProcessQuestions"),
                PipelineBuilder().then(OpenEndedProcessorStep()),
            )
            .build()
        )

    Branch and sequence arguments take either a list of steps or another
    builder.  A builder argument is frozen with ``finish()`` at the moment it
    is appended, so changing that builder afterwards never affects the
    captured branch.
    """

    def __init__(self) -> None:
        self._steps: list = []

    # ------------------------------------------------------------------
    # Appending
    # ------------------------------------------------------------------

    def then(self, step: object) -> "PipelineBuilder":
        """Append *step* and return ``self`` for chaining."""
        if not isinstance(step, StepProtocol):
            raise PipelineConfigError(
                f"{type(step).__name__} does not satisfy StepProtocol "
                f"(needs name, description, requires, provides and execute)."
            )
        new_steps = self._steps + [step]
        # Validate before mutating so errors are raised immediately
        validate_order(new_steps)
        self._steps = new_steps
        return self

    def agent(self, step: GenerativeStep) -> "PipelineBuilder":
        """Append a GenerativeStep."""
        if not isinstance(step, GenerativeStep):
            raise PipelineConfigError(
                f"agent() expects a GenerativeStep, got {type(step).__name__}"
            )
        return self.then(step)

    def tool(self, step: object) -> "PipelineBuilder":
        """Append a tool-like step (validation, parsing, processing)."""
        return self.then(step)

    def conditional(
        self,
        predicate: Predicate,
        when_true: StepsLike,
        when_false: StepsLike | None = None,
        *,
        name: str = "Conditional",
        requires: Iterable[str] = (),
    ) -> "PipelineBuilder":
        """Append a ConditionalStep built from two independent step lists."""
        return self.then(
            ConditionalStep(
                predicate,
                _finished(when_true),
                _finished(when_false) if when_false is not None else (),
                name=name,
                requires=requires,
            )
        )

    def sequence(
        self, steps: StepsLike, *, name: str = "Sequence"
    ) -> "PipelineBuilder":
        """Append a SequenceStep wrapping *steps*."""
        return self.then(SequenceStep(_finished(steps), name=name))

    # ------------------------------------------------------------------
    # Finishing
    # ------------------------------------------------------------------

    def finish(self) -> tuple:
        """Return the accumulated steps as an immutable tuple."""
        return tuple(self._steps)

    def build(self, *, name: str = "Pipeline") -> Pipeline:
        """Return an immutable ``Pipeline`` snapshot of the current steps."""
        return Pipeline(self._steps, name=name)

    async def execute_async(
        self, initial: Mapping[str, Any] | None = None
    ) -> ExecutionContext:
        """Build, run every top-level step on a fresh context, return it."""
        return await self.build().run_async(initial)

    def execute(self, initial: Mapping[str, Any] | None = None) -> ExecutionContext:
        """Sync counterpart of ``execute_async``."""
        return self.build().run(initial)

    def __len__(self) -> int:
        return len(self._steps)


def _finished(steps: StepsLike) -> tuple:
    if isinstance(steps, PipelineBuilder):
        return steps.finish()
    return tuple(steps)
