"""Structural protocols and the result type for the pipeline engine."""

from __future__ import annotations

from collections.abc import Set as AbstractSet
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from .context import ExecutionContext


class OutcomeKind(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class Outcome:
    """Result of one ``execute`` call or one backend request.

    Recoverable failures travel as ``Outcome.failed(error)`` instead of
    ``None`` or a sentinel, so callers have to look at ``kind`` before
    touching ``value``.
    """

    kind: OutcomeKind
    value: Any = None
    error: Exception | None = None

    @classmethod
    def ok(cls, value: Any) -> "Outcome":
        return cls(OutcomeKind.OK, value=value)

    @classmethod
    def empty(cls) -> "Outcome":
        return cls(OutcomeKind.EMPTY)

    @classmethod
    def failed(cls, error: Exception) -> "Outcome":
        return cls(OutcomeKind.FAILED, error=error)

    @property
    def is_ok(self) -> bool:
        return self.kind is OutcomeKind.OK

    @property
    def is_empty(self) -> bool:
        return self.kind is OutcomeKind.EMPTY

    @property
    def is_failed(self) -> bool:
        return self.kind is OutcomeKind.FAILED

    @property
    def reason(self) -> str | None:
        """Human-readable failure reason, ``None`` unless failed."""
        return str(self.error) if self.error is not None else None


@runtime_checkable
class StepProtocol(Protocol):
    """Structural protocol that every step (and Pipeline) must satisfy.

    ``requires`` / ``provides`` name the context keys the step reads and
    writes; the builder uses them to reject steps wired in the wrong order.
    ``AbstractSet[str]`` accepts both ``set`` and ``frozenset``.

    ``@runtime_checkable`` lets the builder use ``isinstance(step,
    StepProtocol)`` to give a clear error when a step is missing required
    attributes.
    """

    name: str
    description: str
    requires: AbstractSet[str]
    provides: AbstractSet[str]

    async def execute(self, ctx: ExecutionContext) -> Outcome: ...


@runtime_checkable
class TextBackendLike(Protocol):
    """Minimal interface a text-generation backend must satisfy.

    ``LiteLLMClient`` is the production implementation; tests use small
    scripted fakes. Failures come back as ``Outcome.failed`` rather than
    exceptions.
    """

    async def generate(self, prompt: str) -> Outcome:
        """Return ``ok(text)``, ``empty`` or ``failed(BackendFailure)``."""
        ...
