from __future__ import annotations

from typing import TYPE_CHECKING

from prflow_core.providers.base import BaseProvider

if TYPE_CHECKING:
    from prflow_core.config import Settings


def get_provider(settings: Settings) -> BaseProvider | None:
    """Build the configured provider, or None when its API key is not set."""
    if not settings.api_key:
        return None
    if settings.provider == "anthropic":
        from prflow_core.providers.anthropic import AnthropicProvider

        return AnthropicProvider(api_key=settings.api_key, model=settings.model)
    if settings.provider == "openai":
        from prflow_core.providers.openai import OpenAIProvider

        return OpenAIProvider(api_key=settings.api_key, model=settings.model)
    raise ValueError(f"Unknown model provider: {settings.provider!r}. Choose 'anthropic' or 'openai'.")
