"""SequenceStep — an ordered group of steps that acts as one step."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from .context import ExecutionContext
from .errors import PipelineOrderError
from .protocol import Outcome

logger = logging.getLogger(__name__)


def infer_contracts(steps: Sequence) -> tuple[frozenset, frozenset]:
    """Compute (requires, provides) for a step chain.

    ``requires`` — keys the chain needs from the outside (what a step needs
                   that no earlier step in the chain provides).
    ``provides`` — union of everything any step writes.
    """
    provided_so_far: set[str] = set()
    external_requires: set[str] = set()
    for step in steps:
        step_requires = set(getattr(step, "requires", frozenset()))
        step_provides = set(getattr(step, "provides", frozenset()))
        external_requires |= step_requires - provided_so_far
        provided_so_far |= step_provides
    return frozenset(external_requires), frozenset(provided_so_far)


def validate_order(steps: Sequence) -> None:
    """Raise PipelineOrderError when a step reads a key a later step writes.

    Keys no step in the chain produces are external inputs (seeded into the
    context by the caller) and are never an error. A step that both reads
    and writes a key (a validator overwriting its target) is fine.
    """
    provided_so_far: set[str] = set()
    for index, step in enumerate(steps):
        step_requires = set(getattr(step, "requires", frozenset()))
        provided_later: set[str] = set()
        for later in steps[index + 1 :]:
            provided_later |= set(getattr(later, "provides", frozenset()))

        out_of_order = (step_requires - provided_so_far) & provided_later
        if out_of_order:
            raise PipelineOrderError(
                f"{getattr(step, 'name', type(step).__name__)} requires "
                f"{sorted(out_of_order)!r} but these are produced by a later "
                f"step, check step ordering."
            )
        provided_so_far |= set(getattr(step, "provides", frozenset()))


async def run_steps(steps: Iterable, ctx: ExecutionContext) -> Outcome:
    """Await each step in order on *ctx*; return the last step's outcome."""
    outcome = Outcome.empty()
    for step in steps:
        logger.debug("Running step %s", getattr(step, "name", type(step).__name__))
        outcome = await step.execute(ctx)
    return outcome


class SequenceStep:
    """Run a fixed, ordered tuple of steps as a single logical unit.

    Contained steps see and mutate the parent context exactly as if they had
    been inlined into the enclosing pipeline.
    """

    def __init__(
        self,
        steps: Iterable,
        *,
        name: str = "Sequence",
        description: str = "",
    ) -> None:
        self.steps: tuple = tuple(steps)
        validate_order(self.steps)
        self.name = name
        self.description = description
        self.requires, self.provides = infer_contracts(self.steps)

    async def execute(self, ctx: ExecutionContext) -> Outcome:
        return await run_steps(self.steps, ctx)

    def __len__(self) -> int:
        return len(self.steps)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, steps={len(self.steps)})"
