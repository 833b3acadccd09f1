"""Base AI provider.

Every provider exposes the same single-shot completion:
    complete() → _call_api()   ← only this differs per provider

Subclasses implement two things only:
  - __init__: validate and store the SDK client
  - _call_api: make one raw API call and return the text response

A failed call is logged and reported as None; callers fall back to their
non-AI behaviour. There is no retry.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)

_MAX_TOKENS = 100


class BaseProvider(ABC):
    MODEL: str = ""
    TEMPERATURE: float = 0.7
    MAX_TOKENS: int = _MAX_TOKENS

    def __init__(self, model: str | None = None):
        self.model = model or self.MODEL

    @property
    def name(self) -> str:
        return f"{self.__class__.__name__.removesuffix('Provider').lower()}:{self.model}"

    def complete(self, system_prompt: str, user_prompt: str, max_tokens: int | None = None) -> str | None:
        """Return the stripped response text, or None when the call fails or returns nothing."""
        try:
            text = self._call_api(system_prompt, user_prompt, max_tokens or self.MAX_TOKENS)
        except Exception as e:
            logger.warning("%s API call failed: %s", self.__class__.__name__, e)
            return None
        if not text or not text.strip():
            logger.warning("%s returned an empty response.", self.__class__.__name__)
            return None
        return text.strip()

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str, max_tokens: int) -> str | None:
        """Make a single API call and return the raw text response.

        Should raise on failure; complete() handles logging.
        """
