"""ConditionalStep — run one of two step lists depending on a predicate."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Callable

from .context import ABSENT, ExecutionContext
from .protocol import Outcome
from .sequence import infer_contracts, run_steps, validate_order

logger = logging.getLogger(__name__)

Predicate = Callable[[ExecutionContext], bool]


def flag_is_set(key: str) -> Predicate:
    """Predicate that is true only when ``ctx[key]`` is the boolean ``True``."""

    def predicate(ctx: ExecutionContext) -> bool:
        return ctx.get_flag(key) is True

    predicate.__name__ = f"flag_is_set({key!r})"
    return predicate


def has_value(key: str) -> Predicate:
    """Predicate that is true when ``ctx[key]`` holds anything but ``ABSENT``."""

    def predicate(ctx: ExecutionContext) -> bool:
        return key in ctx and ctx.get(key) is not ABSENT

    predicate.__name__ = f"has_value({key!r})"
    return predicate


class ConditionalStep:
    """Evaluate *predicate* once, then run the matching branch in order.

    Branch steps are not isolated: they read and write the parent context
    directly and report back only through the keys they write. Both branch
    tuples are captured at construction time.

    ``provides`` is the union of both branches; ``requires`` is the union of
    the branches' external requirements plus any keys the predicate reads
    (declare those via *requires*).
    """

    def __init__(
        self,
        predicate: Predicate,
        when_true: Iterable,
        when_false: Iterable = (),
        *,
        name: str = "Conditional",
        description: str = "",
        requires: Iterable[str] = (),
    ) -> None:
        self.predicate = predicate
        self.when_true: tuple = tuple(when_true)
        self.when_false: tuple = tuple(when_false)
        validate_order(self.when_true)
        validate_order(self.when_false)
        self.name = name
        self.description = description

        true_requires, true_provides = infer_contracts(self.when_true)
        false_requires, false_provides = infer_contracts(self.when_false)
        self.requires: frozenset[str] = (
            frozenset(requires) | true_requires | false_requires
        )
        self.provides: frozenset[str] = true_provides | false_provides

    async def execute(self, ctx: ExecutionContext) -> Outcome:
        taken = bool(self.predicate(ctx))
        branch = self.when_true if taken else self.when_false
        logger.debug(
            "%s: predicate %s, running %d step(s)",
            self.name,
            taken,
            len(branch),
        )
        return await run_steps(branch, ctx)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, "
            f"when_true={len(self.when_true)}, when_false={len(self.when_false)})"
        )
