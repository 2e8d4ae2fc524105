"""Keyword suggestion agent."""

from typing import List, Optional

from ..config import config
from ..errors import InvalidAIResponseError, RequestError
from ..services import GenerationClient
from .base import BaseAgent

KEYWORD_SCHEMA = {
    "type": "array",
    "items": {"type": "string"},
}


class KeywordAgent(BaseAgent[str, List[str]]):
    """Agent suggesting SEO keywords for a reference video."""

    def __init__(
        self,
        client: Optional[GenerationClient] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
    ) -> None:
        # The fast keyword model only exists on the Gemini backend.
        if model is None and client is None and config.provider == "gemini":
            model = config.keyword_model
        super().__init__(client=client, model=model, temperature=temperature)
        # Keywords use the model's own default unless a temperature is given.
        self._temperature = temperature

    @property
    def name(self) -> str:
        """Return the agent's name."""
        return "KeywordAgent"

    async def run(self, input_data: str) -> List[str]:
        """Suggest keywords for a video.

        Args:
            input_data: Reference video URL.

        Returns:
            Ordered keyword list (10-15 expected, not enforced).

        Raises:
            RequestError: If the URL is empty.
            InvalidAIResponseError: If the response is not a list of strings.
        """
        video_url = (input_data or "").strip()
        if not video_url:
            raise RequestError("A video URL is required to suggest keywords.")

        self._logger.info(f"Suggesting keywords for: {video_url}")

        response = await self._generate(self._build_prompt(video_url), KEYWORD_SCHEMA)
        keywords = self._parse_json(response)

        if not isinstance(keywords, list) or not all(isinstance(k, str) for k in keywords):
            self._logger.error("Keyword response is not a list of strings")
            self._logger.debug(f"Raw response: {response}")
            raise InvalidAIResponseError(
                "AI returned an invalid response for keywords. Please try again.",
                {"reason": "expected a JSON array of strings"},
            )

        self._logger.info(f"Suggested {len(keywords)} keywords")
        return keywords

    def _build_prompt(self, video_url: str) -> str:
        return "\n".join([
            f"Analyse the content of the YouTube video at this URL: {video_url}",
            "Based on its title, description and the content that can be inferred, create a list of "
            "10-15 relevant primary and secondary keywords.",
            "The keywords must be useful for creating new, related content.",
            "Return the keywords as a JSON array of strings. Return only the JSON array, "
            "with no markdown or explanation.",
        ])
