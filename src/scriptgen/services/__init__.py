"""External service integrations."""

from typing import Optional

from ..config import PROVIDERS, config
from ..errors import ConfigurationError
from .base import GenerationClient


def create_client(provider: Optional[str] = None, model: Optional[str] = None) -> GenerationClient:
    """Build the generation client for the configured provider.

    Args:
        provider: 'gemini' or 'anthropic'. Defaults to config.provider.
        model: Model override for the client.

    Raises:
        ConfigurationError: If the provider is unknown or not configured.
    """
    provider = (provider or config.provider).lower()

    if provider == "gemini":
        from .gemini import GeminiClient
        return GeminiClient(model=model)
    if provider == "anthropic":
        from .anthropic import AnthropicClient
        return AnthropicClient(model=model)

    raise ConfigurationError(
        f"Unknown provider: {provider}. Must be one of: {', '.join(PROVIDERS)}"
    )


__all__ = ["GenerationClient", "create_client"]
