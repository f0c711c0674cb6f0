"""Backend clients for questionnaire generation.

- ``LiteLLMClient`` / ``LiteLLMConfig`` — LiteLLM integration (100+ providers)
"""

from __future__ import annotations

from .litellm import LiteLLMClient, LiteLLMConfig

__all__ = ["LiteLLMClient", "LiteLLMConfig"]
