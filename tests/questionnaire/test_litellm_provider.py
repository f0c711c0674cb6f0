"""Unit tests for the LiteLLM backend client (acompletion is monkeypatched)."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest

from pipeline import BackendFailure, TextBackendLike
from questionnaire import LiteLLMClient, LiteLLMConfig

ACOMPLETION = "questionnaire.providers.litellm.acompletion"


def _response(content):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        model="gpt-4o-mini",
    )


class FakeCompletion:
    """Records call params and returns (or raises) a scripted value."""

    def __init__(self, result):
        self.result = result
        self.calls: list[dict] = []

    async def __call__(self, **params):
        self.calls.append(params)
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


@pytest.mark.unit
class TestLiteLLMClientConstruction:
    def test_requires_model_or_config(self):
        with pytest.raises(ValueError, match="model"):
            LiteLLMClient()

    def test_config_takes_precedence(self):
        client = LiteLLMClient(config=LiteLLMConfig(model="claude-3-haiku"))
        assert client.model == "claude-3-haiku"

    def test_config_kwargs_split_from_extra_params(self):
        client = LiteLLMClient(model="m", timeout=5, min_interval=0.5, top_p=0.9)
        assert client.config.timeout == 5
        assert client.config.min_interval == 0.5
        assert client.config.extra_params == {"top_p": 0.9}

    def test_satisfies_backend_protocol(self):
        assert isinstance(LiteLLMClient(model="m"), TextBackendLike)


@pytest.mark.unit
class TestLiteLLMClientGenerate:
    def test_request_shape(self, monkeypatch):
        fake = FakeCompletion(_response("{}"))
        monkeypatch.setattr(ACOMPLETION, fake)
        client = LiteLLMClient(
            model="gpt-4o-mini", api_key="sk-test", max_tokens=512, temperature=0.2
        )

        asyncio.run(client.generate("make questions"))

        params = fake.calls[0]
        assert params["model"] == "gpt-4o-mini"
        assert params["messages"] == [{"role": "user", "content": "make questions"}]
        assert params["max_tokens"] == 512
        assert params["temperature"] == 0.2
        assert params["api_key"] == "sk-test"
        assert "api_base" not in params

    def test_success_returns_first_choice_text(self, monkeypatch):
        monkeypatch.setattr(ACOMPLETION, FakeCompletion(_response('{"Questions":[]}')))
        out = asyncio.run(LiteLLMClient(model="m").generate("p"))
        assert out.is_ok
        assert out.value == '{"Questions":[]}'

    def test_transport_error_collapses_to_failed(self, monkeypatch):
        monkeypatch.setattr(ACOMPLETION, FakeCompletion(ConnectionError("refused")))
        out = asyncio.run(LiteLLMClient(model="m").generate("p"))
        assert out.is_failed
        assert isinstance(out.error, BackendFailure)
        assert "refused" in out.reason

    def test_malformed_response_collapses_to_failed(self, monkeypatch):
        monkeypatch.setattr(ACOMPLETION, FakeCompletion(SimpleNamespace(choices=[])))
        out = asyncio.run(LiteLLMClient(model="m").generate("p"))
        assert out.is_failed
        assert "malformed" in out.reason

    @pytest.mark.parametrize("content", [None, "", "  "])
    def test_blank_content_is_empty(self, monkeypatch, content):
        monkeypatch.setattr(ACOMPLETION, FakeCompletion(_response(content)))
        out = asyncio.run(LiteLLMClient(model="m").generate("p"))
        assert out.is_empty

    def test_call_count_is_cumulative(self, monkeypatch):
        monkeypatch.setattr(ACOMPLETION, FakeCompletion(ConnectionError("x")))
        client = LiteLLMClient(model="m")
        asyncio.run(client.generate("p"))
        asyncio.run(client.generate("p"))
        assert client.call_count == 2

    def test_min_interval_throttles_second_request(self, monkeypatch):
        monkeypatch.setattr(ACOMPLETION, FakeCompletion(_response("ok")))
        slept: list[float] = []

        async def fake_sleep(seconds):
            slept.append(seconds)

        monkeypatch.setattr("questionnaire.providers.litellm.asyncio.sleep", fake_sleep)
        client = LiteLLMClient(model="m", min_interval=30.0)

        async def twice():
            await client.generate("p")
            await client.generate("p")

        asyncio.run(twice())
        assert len(slept) == 1
        assert 0 < slept[0] <= 30.0
