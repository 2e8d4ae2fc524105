"""Generation client abstraction."""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from ..models import ReferenceImage


class GenerationClient(ABC):
    """A generative model that returns structured JSON text.

    Implementations make exactly one request per call: transport, auth and
    quota errors propagate unmodified and are never retried.
    """

    @property
    @abstractmethod
    def model(self) -> str:
        """Return the default model being used."""
        ...

    @abstractmethod
    def encode_image(self, image: ReferenceImage) -> Any:
        """Convert a reference image into a request part for this backend."""
        ...

    @abstractmethod
    async def generate_json(
        self,
        prompt: str,
        schema: dict,
        images: Sequence[Any] = (),
        temperature: Optional[float] = None,
        model: Optional[str] = None,
    ) -> str:
        """Request a single structured response.

        Args:
            prompt: Instruction text.
            schema: JSON Schema the response must satisfy.
            images: Parts produced by encode_image.
            temperature: Sampling temperature. None leaves the model default.
            model: Model override.

        Returns:
            The raw response text.
        """
        ...
