"""Model output contract and generation result."""

import threading
import time
from typing import Optional

from pydantic import Field, field_serializer

from .base import WireModel
from .bible import SeriesBible
from .scene import Scene
from .script import CompetitorAnalysis, Script, Suggestions

_id_lock = threading.Lock()
_last_stamp = 0


def new_result_id(mode: str) -> str:
    """Return '<mode>_<epoch ms>', strictly increasing within the process."""
    global _last_stamp
    with _id_lock:
        stamp = max(time.time_ns() // 1_000_000, _last_stamp + 1)
        _last_stamp = stamp
    return f"{mode}_{stamp}"


class GenerationPayload(WireModel):
    """Exact structure the model must return. Identical for both modes."""

    competitor_analysis: CompetitorAnalysis = Field(..., alias="competitorAnalysis")
    optimized_script: Script = Field(..., alias="optimizedScript")
    suggestions: Suggestions

    @classmethod
    def response_schema(cls) -> dict:
        """JSON Schema sent to the model as the output contract."""
        return cls.model_json_schema(by_alias=True, mode="validation")


class GenerationResult(WireModel):
    """A validated generation with its series bible attached."""

    id: str = Field(..., description="Mode tag plus generation timestamp")
    competitor_analysis: CompetitorAnalysis = Field(..., alias="competitorAnalysis")
    optimized_script: Script = Field(..., alias="optimizedScript")
    suggestions: Suggestions
    series_bible: Optional[SeriesBible] = Field(None, alias="seriesBible")

    @field_serializer("series_bible")
    def serialize_series_bible(self, bible: Optional[SeriesBible]) -> Optional[dict]:
        return None if bible is None else bible.to_dict()

    @classmethod
    def from_payload(
        cls,
        payload: GenerationPayload,
        result_id: str,
        series_bible: SeriesBible,
    ) -> "GenerationResult":
        """Combine a validated payload with its id and bible."""
        return cls(
            id=result_id,
            competitor_analysis=payload.competitor_analysis,
            optimized_script=payload.optimized_script,
            suggestions=payload.suggestions,
            series_bible=series_bible,
        )

    @property
    def mode(self) -> str:
        """Mode tag encoded in the id ('analysis' or 'series')."""
        return self.id.split("_", 1)[0]

    def last_scene(self) -> Optional[Scene]:
        """Final scene of the script, the hand-off point for the next episode."""
        return self.optimized_script.last_scene()
