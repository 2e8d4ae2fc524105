"""Base agent abstraction."""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, Sequence, TypeVar

from ..config import config
from ..errors import InvalidAIResponseError
from ..services import GenerationClient, create_client

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class BaseAgent(ABC, Generic[InputT, OutputT]):
    """Abstract base class for agents backed by a generation client.

    Subclasses implement `run`, build their own prompts and schemas, and use
    `_generate` / `_parse_json` for the model round trip.
    """

    def __init__(
        self,
        client: Optional[GenerationClient] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
    ) -> None:
        """Initialize the agent.

        Args:
            client: GenerationClient instance. Created from config if not provided.
            model: Model override. Defaults to the client's model.
            temperature: Sampling temperature. Defaults to config.temperature.
        """
        self._client = client or create_client()
        self._model = model
        self._temperature = config.temperature if temperature is None else temperature
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the agent's name."""
        ...

    @property
    def model(self) -> str:
        """Return the model being used."""
        return self._model or self._client.model

    @property
    def client(self) -> GenerationClient:
        """Return the generation client."""
        return self._client

    @abstractmethod
    async def run(self, input_data: InputT) -> OutputT:
        """Execute the agent's main task.

        Args:
            input_data: Input data for the agent.

        Returns:
            Structured output from the agent.
        """
        ...

    async def _generate(
        self,
        prompt: str,
        schema: dict,
        images: Sequence[Any] = (),
    ) -> str:
        """Send one structured request through the client.

        Args:
            prompt: The instruction text.
            schema: Output JSON Schema.
            images: Encoded image parts.

        Returns:
            The raw response text.
        """
        self._logger.debug(f"Requesting {self.model} with prompt length: {len(prompt)}")

        try:
            response = await self._client.generate_json(
                prompt=prompt,
                schema=schema,
                images=images,
                temperature=self._temperature,
                model=self._model,
            )
        except Exception as e:
            self._logger.error(f"Generation request failed: {e}")
            raise

        self._logger.debug(f"Received response of length: {len(response)}")
        return response

    def _parse_json(self, response: str) -> Any:
        """Parse the model's text as JSON.

        Raises:
            InvalidAIResponseError: If no JSON value can be decoded.
        """
        json_str = extract_json(response)

        try:
            return json.loads(json_str)
        except json.JSONDecodeError as e:
            self._logger.error(f"Failed to parse JSON from {self.name} response: {e}")
            self._logger.debug(f"Raw response: {response}")
            raise InvalidAIResponseError(details={"reason": f"invalid JSON: {e.msg}"}) from e


def extract_json(response: str) -> str:
    """Extract JSON from a response that may contain markdown or other text."""
    stripped = response.strip()
    if stripped.startswith(("{", "[")):
        return stripped

    # Try to find JSON in code blocks
    if "```json" in response:
        start = response.find("```json") + 7
        end = response.find("```", start)
        if end > start:
            return response[start:end].strip()

    if "```" in response:
        start = response.find("```") + 3
        end = response.find("```", start)
        if end > start:
            return response[start:end].strip()

    # Try to find raw JSON object or array
    for start_char, end_char in [("{", "}"), ("[", "]")]:
        start = response.find(start_char)
        if start != -1:
            # Find matching end bracket
            depth = 0
            for i, char in enumerate(response[start:], start):
                if char == start_char:
                    depth += 1
                elif char == end_char:
                    depth -= 1
                    if depth == 0:
                        return response[start:i + 1]

    # Return as-is if no JSON structure found
    return stripped
