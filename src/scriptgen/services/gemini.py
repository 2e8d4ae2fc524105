"""Google Gemini client wrapper (google-genai SDK)."""

import logging
from typing import Any, Optional, Sequence

from google import genai
from google.genai import types

from ..config import config
from ..errors import ConfigurationError
from ..models import ReferenceImage
from .base import GenerationClient

logger = logging.getLogger(__name__)


class GeminiClient(GenerationClient):
    """Client wrapper for Gemini structured output.

    Supports two backends, selected with GEMINI_BACKEND:
    - aistudio (default): uses GEMINI_API_KEY
    - vertex: uses GOOGLE_CLOUD_PROJECT / GOOGLE_CLOUD_LOCATION and
      application default credentials
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        backend: Optional[str] = None,
    ) -> None:
        """Initialize the Gemini client.

        Args:
            api_key: Gemini API key. Defaults to GEMINI_API_KEY env var.
            model: Model to use. Defaults to config.script_model.
            backend: 'aistudio' or 'vertex'. Defaults to config.gemini_backend.
        """
        self._backend = (backend or config.gemini_backend).lower()
        self._model = model or config.script_model

        if self._backend == "vertex":
            if not config.google_cloud_project:
                raise ConfigurationError("GOOGLE_CLOUD_PROJECT not set for Vertex AI backend")
            self._client = genai.Client(
                vertexai=True,
                project=config.google_cloud_project,
                location=config.google_cloud_location,
            )
        else:
            api_key = api_key or config.gemini_api_key
            if not api_key:
                raise ConfigurationError(
                    "Gemini API key not provided. Set GEMINI_API_KEY env var."
                )
            self._client = genai.Client(api_key=api_key)

        logger.debug(f"Initialized Gemini client ({self._backend}, model {self._model})")

    @property
    def model(self) -> str:
        """Return the default model being used."""
        return self._model

    def encode_image(self, image: ReferenceImage) -> types.Part:
        """Wrap raw image bytes as an inline data part."""
        return types.Part.from_bytes(data=image.data, mime_type=image.mime_type)

    async def generate_json(
        self,
        prompt: str,
        schema: dict,
        images: Sequence[Any] = (),
        temperature: Optional[float] = None,
        model: Optional[str] = None,
    ) -> str:
        """Generate a JSON response constrained by schema.

        Raises:
            google.genai.errors.APIError: If the request fails.
        """
        model_name = model or self._model
        contents = [types.Part.from_text(text=prompt), *images]
        generation_config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_json_schema=schema,
            temperature=temperature,
        )

        logger.debug(
            f"Sending request to {model_name} "
            f"(prompt length: {len(prompt)}, images: {len(images)})"
        )
        response = await self._client.aio.models.generate_content(
            model=model_name,
            contents=contents,
            config=generation_config,
        )
        text = response.text or ""
        logger.debug(f"Received response of length: {len(text)}")
        return text
