"""Anthropic Claude API client wrapper."""

import base64
import json
import logging
from typing import Any, Optional, Sequence

from anthropic import NOT_GIVEN, AsyncAnthropic

from ..config import config
from ..errors import ConfigurationError
from ..models import ReferenceImage
from .base import GenerationClient

logger = logging.getLogger(__name__)

JSON_SYSTEM_PROMPT = """You are a structured content generator.
Respond with a single valid JSON value that conforms to the JSON Schema below.
Output JSON only, with no additional text or markdown formatting.

JSON Schema:
{schema}"""


class AnthropicClient(GenerationClient):
    """Client wrapper for Claude, with the output schema carried in the system prompt."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: int = 16000,
    ) -> None:
        """Initialize the Anthropic client.

        Args:
            api_key: Anthropic API key. Defaults to ANTHROPIC_API_KEY env var.
            model: Model to use. Defaults to config.anthropic_model.
            max_tokens: Maximum tokens in the response.
        """
        self._api_key = api_key or config.anthropic_api_key
        if not self._api_key:
            raise ConfigurationError(
                "Anthropic API key not provided. Set ANTHROPIC_API_KEY env var."
            )

        # One attempt per call; failures surface to the caller.
        self._client = AsyncAnthropic(api_key=self._api_key, max_retries=0)
        self._model = model or config.anthropic_model
        self._max_tokens = max_tokens

    @property
    def model(self) -> str:
        """Return the model being used."""
        return self._model

    def encode_image(self, image: ReferenceImage) -> dict:
        """Encode an image as a base64 content block."""
        return {
            "type": "image",
            "source": {
                "type": "base64",
                "media_type": image.mime_type,
                "data": base64.b64encode(image.data).decode("ascii"),
            },
        }

    async def generate_json(
        self,
        prompt: str,
        schema: dict,
        images: Sequence[Any] = (),
        temperature: Optional[float] = None,
        model: Optional[str] = None,
    ) -> str:
        """Create a message whose text is expected to be JSON matching schema.

        Returns:
            The text content of Claude's response.

        Raises:
            anthropic.APIError: If the API request fails.
        """
        model_name = model or self._model
        content = [*images, {"type": "text", "text": prompt}]

        logger.debug(
            f"Sending request to {model_name} "
            f"(prompt length: {len(prompt)}, images: {len(images)})"
        )
        response = await self._client.messages.create(
            model=model_name,
            max_tokens=self._max_tokens,
            # Claude accepts temperatures in [0, 1]
            temperature=NOT_GIVEN if temperature is None else min(temperature, 1.0),
            system=JSON_SYSTEM_PROMPT.format(schema=json.dumps(schema, ensure_ascii=False)),
            messages=[{"role": "user", "content": content}],
        )

        text = "".join(block.text for block in response.content if hasattr(block, "text"))
        logger.debug(f"Received response of length: {len(text)}")
        return text
