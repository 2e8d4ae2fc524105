"""Generation request models.

A request is a tagged variant: ``mode`` selects between a fresh competitive
analysis and a series continuation, each carrying its own required fields.
Any missing or malformed field is a RequestError raised before anything is
sent to the model.
"""

import mimetypes
from pathlib import Path
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from ..errors import RequestError
from .bible import SeriesBible


class ReferenceImage(BaseModel):
    """A decoded reference image supplied with an analysis request."""

    data: bytes = Field(..., description="Raw image bytes")
    mime_type: str = Field(..., description="Image MIME type, e.g. image/png")
    name: Optional[str] = Field(None, description="Original file name")

    @classmethod
    def from_path(cls, path: Path) -> "ReferenceImage":
        """Load an image from disk, guessing the MIME type from its extension."""
        mime_type, _ = mimetypes.guess_type(path.name)
        if not mime_type or not mime_type.startswith("image/"):
            raise RequestError(f"Not a supported image file: {path}")
        return cls(data=path.read_bytes(), mime_type=mime_type, name=path.name)


def _format_errors(error: ValidationError) -> List[str]:
    return [
        f"{'.'.join(str(part) for part in err['loc']) or 'request'}: {err['msg']}"
        for err in error.errors()
    ]


class _RequestBase(BaseModel):
    """Fields common to both request modes."""

    duration_minutes: int = Field(..., description="Target duration in minutes", ge=1)
    genre: str = Field(..., description="Genre or style label")
    language: str = Field(..., description="Dialogue language")
    voice: str = Field(..., description="Narration voice descriptor")

    class Config:
        """Pydantic config."""
        extra = "forbid"
        frozen = True

    def __init__(self, **data) -> None:
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise RequestError(
                f"Invalid {type(self).__name__}",
                {"errors": _format_errors(e)},
            ) from e


class AnalysisRequest(_RequestBase):
    """Fresh competitive analysis of a reference video."""

    mode: Literal["analysis"] = "analysis"
    video_url: str = Field(..., description="Reference (competitor) video URL", min_length=1)
    channel_url: Optional[str] = Field(None, description="Creator's own video or channel URL")
    reference_images: List[ReferenceImage] = Field(default_factory=list)
    competitive_angle: str = Field(..., description="Creator's competitive angle")
    target_keywords: List[str] = Field(default_factory=list, description="SEO keywords to optimise for")
    suggested_keywords: List[str] = Field(default_factory=list, description="Keywords for reference only")

    @field_validator("video_url")
    @classmethod
    def _video_url_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("video URL is required for analysis")
        return value.strip()


class SeriesRequest(_RequestBase):
    """Next episode of an existing series."""

    mode: Literal["series"] = "series"
    bible_json: str = Field(..., description="Serialized series bible of the prior episode")
    last_scene_json: str = Field(..., description="Serialized last scene of the prior episode")
    episode_topic: str = Field(..., description="Topic of the new episode")

    @field_validator("bible_json")
    @classmethod
    def _bible_parses(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("series bible is required for series generation")
        try:
            SeriesBible.model_validate_json(value)
        except ValidationError as e:
            raise ValueError(f"series bible is not valid: {e.error_count()} error(s)") from e
        return value

    @field_validator("last_scene_json", "episode_topic")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @property
    def bible(self) -> SeriesBible:
        """The series bible parsed from bible_json."""
        return SeriesBible.model_validate_json(self.bible_json)


GenerationRequest = Annotated[
    Union[AnalysisRequest, SeriesRequest],
    Field(discriminator="mode"),
]

_request_adapter = TypeAdapter(GenerationRequest)


def parse_request(data: dict) -> Union[AnalysisRequest, SeriesRequest]:
    """Build a request of the right mode from a plain mapping.

    Raises:
        RequestError: If the mode is unknown or required fields are missing.
    """
    try:
        return _request_adapter.validate_python(data)
    except ValidationError as e:
        raise RequestError("Invalid generation request", {"errors": _format_errors(e)}) from e
