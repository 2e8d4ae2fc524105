"""Script, analysis and suggestion data models."""

from typing import List, Optional
from pydantic import Field

from .base import NARRATIVE_LANGUAGE, WireModel
from .scene import Scene

NOT_APPLICABLE = "N/A"


class CharacterProfile(WireModel):
    """Canonical description of one character. Identified by name."""

    name: str = Field(..., description="Character name.")
    description: str = Field(
        ...,
        description="Detailed description of the character, including role and origin if any.",
    )
    appearance: str = Field(
        ...,
        description="Extremely detailed appearance: face, hair, style, signature clothing.",
    )
    personality: str = Field(..., description="Core personality traits.")
    voice_profile: str = Field(
        ...,
        description="Detailed voice description: Tone, Pitch, Speed and Style.",
    )

    @property
    def full_description(self) -> str:
        """Description and appearance concatenated, as inserted into prompts."""
        return f"{self.description.strip()} {self.appearance.strip()}".strip()


class ScriptOverview(WireModel):
    """Overview section of a script; the source of the series bible."""

    summary: str = Field(
        ...,
        alias="tom_tat",
        description=f"Short summary of the script's main content, in {NARRATIVE_LANGUAGE}.",
    )
    setting: str = Field(
        ...,
        alias="boi_canh",
        description=f"Overall setting of the video, in {NARRATIVE_LANGUAGE}.",
    )
    characters: List[CharacterProfile] = Field(
        ...,
        alias="ho_so_nhan_vat",
        description=(
            "One detailed profile for EVERY character, main and secondary. "
            "This is the single source of character information."
        ),
    )
    tone: str = Field(
        ...,
        alias="tong_giong",
        description=f"Overall tone and style of the video (e.g. humorous, serious), in {NARRATIVE_LANGUAGE}.",
    )
    visual_style: str = Field(
        ...,
        alias="phong_cach_hinh_anh",
        description=(
            "Consistent visual style for the whole video (e.g. 'Pixar-style 3D animation', "
            "'Cinematic, realistic 8K photo'). This is what keeps the images consistent."
        ),
    )


class SeoInfo(WireModel):
    """SEO title and keyword tiers."""

    title: str = Field(
        ...,
        alias="tieu_de",
        description=f"Compelling, SEO-optimised video title, in {NARRATIVE_LANGUAGE}.",
    )
    primary_keywords: List[str] = Field(
        ...,
        alias="tu_khoa_chinh",
        description=f"2-3 most important primary keywords, in {NARRATIVE_LANGUAGE}.",
    )
    secondary_keywords: List[str] = Field(
        ...,
        alias="tu_khoa_phu",
        description=f"4-5 secondary keywords supporting the primary ones, in {NARRATIVE_LANGUAGE}.",
    )
    related_keywords: List[str] = Field(
        ...,
        alias="tu_khoa_lien_quan",
        description=f"Related or LSI keywords, in {NARRATIVE_LANGUAGE}.",
    )


class Script(WireModel):
    """A complete script: overview, SEO block and three scene sequences."""

    overview: ScriptOverview
    seo: SeoInfo
    intro: List[Scene] = Field(..., description="Opening scenes that hook the viewer.")
    body: List[Scene] = Field(..., description="Scenes developing the main content and climax.")
    outro: List[Scene] = Field(..., description="Closing scenes: wrap-up and call to action.")

    def scenes(self) -> List[Scene]:
        """Return intro, body and outro scenes in order."""
        return [*self.intro, *self.body, *self.outro]

    def last_scene(self) -> Optional[Scene]:
        """Return the final scene of the script, if any."""
        for section in (self.outro, self.body, self.intro):
            if section:
                return section[-1]
        return None


class StructuralSegment(WireModel):
    """One segment of the competitor video's structure."""

    segment: str = Field(
        ...,
        alias="phan_doan",
        description="Segment name and timestamps, e.g. 'Intro - Hook (0:00 - 0:25)'.",
    )
    description: str = Field(
        ...,
        alias="mo_ta",
        description="Short description of the segment's content and purpose.",
    )


class CompetitorAnalysis(WireModel):
    """Structural breakdown and assessment of the reference video."""

    structural_analysis: List[StructuralSegment] = Field(
        ...,
        alias="structuralAnalysis",
        description=f"The competitor video's structure split into timed segments, in {NARRATIVE_LANGUAGE}.",
    )
    strengths: List[str] = Field(
        ...,
        description=f"Main strengths of the competitor video, in {NARRATIVE_LANGUAGE}.",
    )
    weaknesses: List[str] = Field(
        ...,
        description=f"Weaknesses, gaps or missed opportunities of the competitor video, in {NARRATIVE_LANGUAGE}.",
    )
    content_gaps: List[str] = Field(
        ...,
        alias="contentGaps",
        description=f"Exactly 3 content gaps or angles the competitor has not explored, in {NARRATIVE_LANGUAGE}.",
    )

    @classmethod
    def not_applicable(cls) -> "CompetitorAnalysis":
        """Placeholder analysis used for series continuations."""
        return cls(
            structural_analysis=[
                StructuralSegment(
                    segment=NOT_APPLICABLE,
                    description="Series continuation script; no competitor analysis was performed.",
                )
            ],
            strengths=[],
            weaknesses=[],
            content_gaps=[],
        )


class Suggestions(WireModel):
    """Title and thumbnail candidates for the new script."""

    titles: List[str] = Field(
        ...,
        description=f"5 SEO-optimised, attention-grabbing titles based on the new script, in {NARRATIVE_LANGUAGE}.",
    )
    thumbnail_ideas: List[str] = Field(
        ...,
        alias="thumbnailIdeas",
        description=f"5 unique, intriguing thumbnail ideas showing the new script's content, in {NARRATIVE_LANGUAGE}.",
    )
