"""Environment-driven settings for questionnaire generation.

Reads ``QUESTIONNAIRE_*`` variables from the process environment.  Callers
that keep them in a ``.env`` file load it with ``python-dotenv`` first (the
CLI script does).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .providers.litellm import LiteLLMConfig

DEFAULT_MODEL = "gpt-4o-mini"


@dataclass
class Settings:
    """Resolved settings for one questionnaire run."""

    llm: LiteLLMConfig
    max_attempts: int = 3

    def with_overrides(
        self, model: Optional[str] = None, max_attempts: Optional[int] = None
    ) -> "Settings":
        """Apply explicit overrides; ``None`` keeps the current value."""
        if model is not None:
            self.llm.model = model
        if max_attempts is not None:
            self.max_attempts = max_attempts
        return self


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build ``Settings`` from *environ* (defaults to ``os.environ``)."""
    env = os.environ if environ is None else environ
    llm = LiteLLMConfig(
        model=env.get("QUESTIONNAIRE_MODEL", DEFAULT_MODEL),
        api_key=env.get("QUESTIONNAIRE_API_KEY") or None,
        api_base=env.get("QUESTIONNAIRE_API_BASE") or None,
        temperature=float(env.get("QUESTIONNAIRE_TEMPERATURE", "0.0")),
        max_tokens=int(env.get("QUESTIONNAIRE_MAX_TOKENS", "2048")),
        min_interval=float(env.get("QUESTIONNAIRE_MIN_INTERVAL", "0.0")),
    )
    return Settings(
        llm=llm,
        max_attempts=int(env.get("QUESTIONNAIRE_MAX_ATTEMPTS", "3")),
    )
