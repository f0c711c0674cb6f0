"""Generic sequential pipeline engine: build step chains, run them on one context.

Public surface::

    from pipeline import (
        PipelineBuilder,
        Pipeline,
        ExecutionContext,
        ABSENT,
        Outcome,
        StepProtocol,
        GenerativeStep,
        ValidationRetryStep,
        ConditionalStep,
        SequenceStep,
        ValidationExhausted,
    )
"""

from .conditional import ConditionalStep, flag_is_set, has_value
from .context import ABSENT, ExecutionContext, result_key
from .errors import (
    BackendFailure,
    PipelineConfigError,
    PipelineError,
    PipelineOrderError,
    ValidationExhausted,
    WiringError,
)
from .generative import GenerativeStep
from .pipeline import Pipeline, PipelineBuilder
from .protocol import Outcome, OutcomeKind, StepProtocol, TextBackendLike
from .sequence import SequenceStep
from .validation import ValidationRetryStep, is_structured_document

__all__ = [
    "ABSENT",
    "BackendFailure",
    "ConditionalStep",
    "ExecutionContext",
    "GenerativeStep",
    "Outcome",
    "OutcomeKind",
    "Pipeline",
    "PipelineBuilder",
    "PipelineConfigError",
    "PipelineError",
    "PipelineOrderError",
    "SequenceStep",
    "StepProtocol",
    "TextBackendLike",
    "ValidationExhausted",
    "ValidationRetryStep",
    "WiringError",
    "flag_is_set",
    "has_value",
    "is_structured_document",
    "result_key",
]
