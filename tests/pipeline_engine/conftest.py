"""Shared fixtures and reusable dummy steps for pipeline engine tests.

No questionnaire imports: every step here is a generic dummy that only
uses the pipeline primitives (ExecutionContext, Outcome, StepProtocol).
"""

from __future__ import annotations

import pytest

from pipeline import BackendFailure, ExecutionContext, Outcome, result_key

# ---------------------------------------------------------------------------
# Reusable dummy step classes
# ---------------------------------------------------------------------------


class Record:
    """Appends its name to a shared log and writes ``<name>_Result``."""

    description = "records execution order"
    requires = frozenset()

    def __init__(self, name: str, log: list[str]):
        self.name = name
        self.log = log
        self.provides = frozenset({result_key(name)})

    async def execute(self, ctx: ExecutionContext) -> Outcome:
        self.log.append(self.name)
        ctx.set(result_key(self.name), f"{self.name} ran")
        return Outcome.ok(self.name)


class SetValue:
    """Writes a fixed value under a fixed key."""

    description = "sets a value"
    requires = frozenset()

    def __init__(self, key: str, value, name: str = "SetValue"):
        self.key = key
        self.value = value
        self.name = name
        self.provides = frozenset({key})

    async def execute(self, ctx: ExecutionContext) -> Outcome:
        ctx.set(self.key, self.value)
        return Outcome.ok(self.value)


class Needs:
    """Requires *key*; copies it to ``<name>_Result``."""

    description = "reads a key"

    def __init__(self, key: str, name: str = "Needs"):
        self.key = key
        self.name = name
        self.requires = frozenset({key})
        self.provides = frozenset({result_key(name)})

    async def execute(self, ctx: ExecutionContext) -> Outcome:
        ctx.set(result_key(self.name), ctx.get(self.key))
        return Outcome.ok(ctx.get(self.key))


class Boom:
    """Always raises RuntimeError."""

    name = "Boom"
    description = "explodes"
    requires = frozenset()
    provides = frozenset()

    async def execute(self, ctx: ExecutionContext) -> Outcome:
        raise RuntimeError("boom")


FAIL = object()


class MockBackend:
    """Scripted backend.

    Each ``generate`` call pops the next response: a string becomes
    ``Outcome.ok`` (``""`` becomes ``Outcome.empty``), ``FAIL`` becomes
    ``Outcome.failed``, an exception instance is raised.  When the script
    runs out, the last response repeats.
    """

    def __init__(self, responses: list):
        self._responses = list(responses)
        self.prompts: list[str] = []

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    async def generate(self, prompt: str) -> Outcome:
        self.prompts.append(prompt)
        response = (
            self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        )
        if response is FAIL:
            return Outcome.failed(BackendFailure("scripted failure"))
        if isinstance(response, Exception):
            raise response
        if response == "":
            return Outcome.empty()
        return Outcome.ok(response)


class CountingCheck:
    """Wraps a structural check and counts invocations."""

    def __init__(self, check):
        self.check = check
        self.calls = 0

    def __call__(self, text: str) -> bool:
        self.calls += 1
        return self.check(text)


# ---------------------------------------------------------------------------
# Pytest fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def log() -> list[str]:
    return []


@pytest.fixture
def ctx() -> ExecutionContext:
    return ExecutionContext()
