"""Data models for the script generator."""

from .scene import MotionPrompt, Scene
from .script import (
    CharacterProfile,
    CompetitorAnalysis,
    Script,
    ScriptOverview,
    SeoInfo,
    StructuralSegment,
    Suggestions,
)
from .bible import BibleCharacter, SeriesBible
from .request import (
    AnalysisRequest,
    GenerationRequest,
    ReferenceImage,
    SeriesRequest,
    parse_request,
)
from .result import GenerationPayload, GenerationResult, new_result_id

__all__ = [
    "MotionPrompt",
    "Scene",
    "CharacterProfile",
    "CompetitorAnalysis",
    "Script",
    "ScriptOverview",
    "SeoInfo",
    "StructuralSegment",
    "Suggestions",
    "BibleCharacter",
    "SeriesBible",
    "AnalysisRequest",
    "GenerationRequest",
    "ReferenceImage",
    "SeriesRequest",
    "parse_request",
    "GenerationPayload",
    "GenerationResult",
    "new_result_id",
]
