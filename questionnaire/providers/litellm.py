"""LiteLLM client — the text-generation backend for questionnaire pipelines.

Satisfies ``pipeline.TextBackendLike``: every failure (transport, non-2xx
status, malformed response) is logged and returned as
``Outcome.failed(BackendFailure)`` instead of being raised.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from litellm import acompletion

from pipeline import BackendFailure, Outcome

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# LiteLLMConfig
# ---------------------------------------------------------------------------


@dataclass
class LiteLLMConfig:
    """Configuration for LiteLLM client."""

    model: str
    api_key: Optional[str] = None
    api_base: Optional[str] = None
    temperature: float = 0.0
    max_tokens: int = 2048
    timeout: int = 60
    max_retries: int = 0

    # Minimum seconds between two requests from the same client
    min_interval: float = 0.0

    # HTTP settings
    extra_headers: Optional[Dict[str, str]] = None

    # Model-specific parameters passed straight through
    extra_params: Optional[Dict[str, Any]] = None


# ---------------------------------------------------------------------------
# LiteLLMClient
# ---------------------------------------------------------------------------


class LiteLLMClient:
    """Chat-completion backend using LiteLLM for provider-agnostic access.

    Sends one request per ``generate`` call with the prompt as a single user
    message.  The API key is sent as a bearer token by LiteLLM.

    Requests are counted in ``call_count``; with ``min_interval`` set, the
    client sleeps between requests so retries from a validation loop are
    throttled along with everything else.

    Example::

        client = LiteLLMClient(model="gpt-4o-mini", api_key=os.environ["OPENAI_API_KEY"])
        outcome = await client.generate("List three screening questions as JSON")
    """

    def __init__(
        self,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        api_base: Optional[str] = None,
        temperature: float = 0.0,
        max_tokens: int = 2048,
        config: Optional[LiteLLMConfig] = None,
        **kwargs: Any,
    ) -> None:
        if config:
            self.config = config
        else:
            if model is None:
                raise ValueError(
                    "Either 'model' parameter or 'config' with model must be provided"
                )
            config_fields = {
                "timeout",
                "max_retries",
                "min_interval",
                "extra_headers",
            }
            config_kwargs = {k: v for k, v in kwargs.items() if k in config_fields}
            extra_params = {k: v for k, v in kwargs.items() if k not in config_fields}

            self.config = LiteLLMConfig(
                model=model,
                api_key=api_key,
                api_base=api_base,
                temperature=temperature,
                max_tokens=max_tokens,
                extra_params=extra_params if extra_params else None,
                **config_kwargs,
            )

        self.model = self.config.model
        self.call_count = 0
        self._last_request_at: Optional[float] = None

    # -- Call building --------------------------------------------------------

    def _build_call_params(self, messages: List[Dict[str, str]]) -> Dict[str, Any]:
        """Build the parameter dict for a litellm.acompletion() call."""
        call_params: Dict[str, Any] = {
            "model": self.config.model,
            "messages": messages,
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
            "timeout": self.config.timeout,
            "num_retries": self.config.max_retries,
            "drop_params": True,
        }
        if self.config.api_key:
            call_params["api_key"] = self.config.api_key
        if self.config.api_base:
            call_params["api_base"] = self.config.api_base
        if self.config.extra_headers:
            call_params["extra_headers"] = self.config.extra_headers
        if self.config.extra_params:
            call_params.update(self.config.extra_params)
        return call_params

    async def _throttle(self) -> None:
        if self.config.min_interval <= 0 or self._last_request_at is None:
            return
        wait = self.config.min_interval - (time.monotonic() - self._last_request_at)
        if wait > 0:
            logger.debug("Throttling LiteLLM request for %.2fs", wait)
            await asyncio.sleep(wait)

    # -- Generation -----------------------------------------------------------

    async def generate(self, prompt: str) -> Outcome:
        """Send *prompt* and return the first choice's text as an Outcome."""
        await self._throttle()
        self.call_count += 1
        self._last_request_at = time.monotonic()

        call_params = self._build_call_params([{"role": "user", "content": prompt}])
        try:
            response = await acompletion(**call_params)
        except Exception as e:
            logger.error(f"Error in LiteLLM completion: {e}")
            return Outcome.failed(BackendFailure(str(e)))

        try:
            text = response.choices[0].message.content
        except (AttributeError, IndexError, KeyError, TypeError) as e:
            logger.error("Malformed LiteLLM response from %s: %s", self.model, e)
            return Outcome.failed(BackendFailure(f"malformed response: {e}"))

        if not text or not text.strip():
            logger.warning("LiteLLM returned empty content for model %s", self.model)
            return Outcome.empty()
        return Outcome.ok(text)

    def __repr__(self) -> str:
        return f"LiteLLMClient(model={self.model!r})"
