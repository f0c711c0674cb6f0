"""Pipeline error types."""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for every error defined by the pipeline engine."""


class PipelineOrderError(PipelineError):
    """A step requires a key that only a later step provides."""


class PipelineConfigError(PipelineError):
    """Invalid pipeline wiring.

    Examples:
    - ``PipelineBuilder.agent()`` called with something that is not a
      ``GenerativeStep``.
    - A ``ValidationRetryStep`` constructed with ``max_attempts < 1``.
    """


class BackendFailure(PipelineError):
    """The text-generation backend could not produce a response.

    Never raised across a step boundary; carried inside
    ``Outcome.failed`` so the pipeline keeps running.
    """


class WiringError(PipelineError):
    """A context key a step strictly needs is missing or has the wrong type.

    Carried inside ``Outcome.failed``; the step aborts early and downstream
    steps observe an absent result.
    """

    def __init__(self, key: str, step_name: str) -> None:
        self.key = key
        self.step_name = step_name
        super().__init__(
            f"{step_name}: context key {key!r} is missing or not text"
        )


class ValidationExhausted(PipelineError):
    """The structural check failed on every permitted attempt.

    The only error the engine raises to its caller; it terminates the run.
    """

    def __init__(self, attempts: int, step_name: str) -> None:
        self.attempts = attempts
        self.step_name = step_name
        super().__init__(
            f"{step_name}: validation failed after {attempts} attempt(s)"
        )
