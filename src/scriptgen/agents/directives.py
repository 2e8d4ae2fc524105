"""Generation directives: instruction text plus output schema.

Both modes share one output contract (GenerationPayload). They differ in the
inputs they describe and in which fields are freely authored versus copied
from the series bible.
"""

from dataclasses import dataclass
from typing import List, Union

from ..budget import SceneBudget
from ..errors import RequestError
from ..models import AnalysisRequest, CompetitorAnalysis, GenerationPayload, SeriesRequest
from ..models.base import DESCRIPTIVE_LANGUAGE, NARRATIVE_LANGUAGE
from ..models.scene import MAX_DIALOGUE_CHARS, MAX_DIALOGUE_WORDS

ANIMATED_STYLE_EXAMPLE = "Pixar-style 3D animation, vibrant colors, soft textures, cinematic lighting"
REALISTIC_STYLE_EXAMPLE = "Cinematic, realistic 8K photo, dramatic lighting, sharp focus, hyper-detailed"


@dataclass(frozen=True)
class Directive:
    """Instruction text and the JSON Schema the response must satisfy."""

    prompt: str
    schema: dict


def build_directive(
    request: Union[AnalysisRequest, SeriesRequest],
    budget: SceneBudget,
) -> Directive:
    """Assemble the directive for a request.

    Raises:
        RequestError: If the request is not one of the known modes.
    """
    if isinstance(request, AnalysisRequest):
        prompt = build_analysis_prompt(request, budget)
    elif isinstance(request, SeriesRequest):
        prompt = build_series_prompt(request, budget)
    else:
        raise RequestError(f"Unsupported request type: {type(request).__name__}")

    return Directive(prompt=prompt, schema=GenerationPayload.response_schema())


def build_analysis_prompt(request: AnalysisRequest, budget: SceneBudget) -> str:
    """Build the fresh competitive analysis prompt."""
    prompt_parts = [
        "You are a master content strategist and screenwriter.",
        "",
        "INPUTS:",
        f"- Competitor video to analyse: {request.video_url}",
    ]

    if request.channel_url:
        prompt_parts.append(f"- My own video/channel, for style reference: {request.channel_url}")
    if request.reference_images:
        prompt_parts.append(f"- {len(request.reference_images)} attached reference image(s) showing the desired style.")

    prompt_parts.extend([
        f"- Genre: {request.genre}",
        f"- Target duration: {request.duration_minutes} minutes",
        f"- Dialogue language: {request.language}",
        f"- Narration voice: {request.voice}",
        f'- My competitive angle / goal: "{request.competitive_angle}"',
    ])

    if request.target_keywords:
        prompt_parts.append(
            f"- TARGET SEO KEYWORDS (the script MUST be optimised for these): {', '.join(request.target_keywords)}."
        )
    if request.suggested_keywords:
        prompt_parts.append(
            f"- Suggested keywords (for reference only): {', '.join(request.suggested_keywords)}."
        )

    prompt_parts.extend(["", *_visual_style_requirement(request.genre), ""])

    prompt_parts.extend([
        "PROCESS (2 PHASES):",
        "",
        "PHASE 1: IN-DEPTH COMPETITOR ANALYSIS",
        "1. Structure: watch the competitor video and split it into logical segments (hook, problem, "
        "solution, climax, conclusion, ...) with timestamps and the purpose of each segment.",
        "2. Strengths and weaknesses: identify exactly what the competitor does well (story, visuals, pacing) "
        "and what it does poorly or misses (implausible plot points, clichéd dialogue, weak ending).",
        "3. Content gaps: propose exactly 3 angles or aspects the competitor has not explored. "
        "These are our opportunities to stand out.",
        "4. Put all of this in `competitorAnalysis`.",
        "",
        "PHASE 2: A SUPERIOR SCRIPT AND STRATEGY",
        "1. Write a COMPLETELY NEW script in the same genre, based on ALL of Phase 1, my competitive angle, "
        "and the style of the reference images and my channel (if given).",
        "   - Keep the strengths, fix every weakness, and fill all 3 content gaps. The script must be more "
        "engaging, more logical and more dramatic: a full structural upgrade.",
        "   - Build the script around the target SEO keywords.",
        "2. Character profiles (CRITICAL): in `overview.ho_so_nhan_vat` create a DETAILED profile for EVERY "
        "character with 'name', 'description', 'appearance', 'personality' and 'voice_profile' "
        "(Tone, Pitch, Speed, Style). These profiles are the foundation of the whole series.",
        "3. Direct every scene:",
        "   - Each 'motionPrompt' must be a vivid picture that evokes emotion and atmosphere.",
        f"   - Add 'visuals_notes' (in {NARRATIVE_LANGUAGE}) with key production directions.",
        "4. Strategy: create 5 titles and 5 thumbnail ideas, SEO-optimised, for the new script.",
        "5. Put the script in `optimizedScript` and the suggestions in `suggestions`.",
        "",
    ])

    prompt_parts.extend(_consistency_rules(request.language, source="the overview"))
    prompt_parts.extend(_scene_count_rules(request.duration_minutes, budget))
    prompt_parts.extend(_closing_rules())

    return "\n".join(prompt_parts)


def build_series_prompt(request: SeriesRequest, budget: SceneBudget) -> str:
    """Build the series continuation prompt."""
    placeholder = CompetitorAnalysis.not_applicable().to_json(indent=None)

    prompt_parts = [
        "You are a master screenwriter specialising in continuing series.",
        "",
        "CONTEXT: you are writing the NEXT EPISODE of an existing series. "
        "You must stay absolutely consistent with the previous episodes.",
        "",
        "CORE INPUTS:",
        "1. SERIES BIBLE (the fixed rules of the series):",
        f"   {request.bible_json}",
        "   ORDER: every character, visual style and tone description in the new script MUST conform "
        "exactly to this Series Bible. Do not invent new descriptions for existing characters.",
        "2. LAST SCENE OF THE PREVIOUS EPISODE:",
        f"   {request.last_scene_json}",
        "   ORDER: the first scene of the new episode must continue directly and logically from the "
        "action and dialogue of this scene.",
        "3. TOPIC OF THE NEW EPISODE:",
        f'   "{request.episode_topic}"',
        "",
        "PRODUCTION DETAILS:",
        f"- Genre: {request.genre}",
        f"- Target duration: {request.duration_minutes} minutes",
        f"- Dialogue language: {request.language}",
        f"- Narration voice: {request.voice}",
        "",
        "PROCESS:",
        "1. Study the Series Bible, the last scene and the new topic carefully.",
        "2. Write the continuation:",
        "   - A COMPLETELY NEW, engaging script built on the new topic.",
        "   - Opening scene: starts immediately after the last scene of the previous episode.",
        "   - Apply the Series Bible strictly to every scene so characters, visuals and mood never drift.",
        "   - `overview.ho_so_nhan_vat`, `overview.phong_cach_hinh_anh` and `overview.tong_giong` are "
        "copied from the Series Bible.",
        "3. Direct every scene:",
        "   - Each 'motionPrompt' must be vivid and match the established tone.",
        f"   - Add 'visuals_notes' (in {NARRATIVE_LANGUAGE}) with production directions.",
        "4. New suggestions: 5 new titles and 5 new thumbnail ideas for this episode.",
        "5. Skip the analysis: this is a continuation, so do not analyse any competitor. "
        f"Set `competitorAnalysis` to exactly: {placeholder}",
        "",
    ]

    prompt_parts.extend(_consistency_rules(request.language, source="the Series Bible"))
    prompt_parts.extend(_scene_count_rules(request.duration_minutes, budget))
    prompt_parts.extend(_closing_rules())

    return "\n".join(prompt_parts)


def _visual_style_requirement(genre: str) -> List[str]:
    if "3d" in genre.lower():
        return [
            "VISUAL STYLE REQUIREMENT (CRITICAL):",
            "- 'phong_cach_hinh_anh' MUST be a detailed 3D animation style "
            f"(e.g. '{ANIMATED_STYLE_EXAMPLE}'). NEVER write photorealistic image prompts.",
        ]
    return [
        "VISUAL STYLE REQUIREMENT (CRITICAL):",
        "- 'phong_cach_hinh_anh' MUST be a cinematic, realistic style "
        f"(e.g. '{REALISTIC_STYLE_EXAMPLE}'). NEVER write cartoon or animated image prompts.",
    ]


def _consistency_rules(language: str, source: str) -> List[str]:
    return [
        "5 GOLDEN CONSISTENCY RULES (NEVER BREAK THEM):",
        f"1. VISUAL UNITY: the 'phong_cach_hinh_anh' string from {source} is copied verbatim "
        "as the VERY FIRST part of EVERY 'imagePrompt'.",
        "2. CHARACTER INTEGRITY (CRITICAL): for EVERY scene, identify all characters present. Then:",
        f"   - Find the profile of EACH of them in the 'ho_so_nhan_vat' array of {source}.",
        "   - In 'imagePrompt', immediately after the visual style, insert the full description of ALL of "
        "them: their 'description' followed by their 'appearance'.",
        "   - The 'character' field of 'motionPrompt' MUST also START WITH those full descriptions.",
        "3. VOICE CONSISTENCY AND ATTRIBUTION: all 'dialogue' is written in the style of the speaking "
        "character's 'voice_profile'. If several characters speak in one scene, EVERY line MUST be "
        "formatted 'CHARACTER NAME: line...'.",
        f"4. LANGUAGE DISCIPLINE: the 'dialogue' field is written ONLY in {language}, never any other "
        f"language. Fields described as {DESCRIPTIVE_LANGUAGE} stay in {DESCRIPTIVE_LANGUAGE}; fields "
        f"described as {NARRATIVE_LANGUAGE} stay in {NARRATIVE_LANGUAGE}.",
        "5. SCENE CONTINUITY: the action, dialogue or setting at the start of each scene MUST follow "
        "directly and logically from the end of the previous scene. No unexplained jumps in time or "
        "space unless clearly intended (montage, flashback).",
        "",
    ]


def _scene_count_rules(duration_minutes: int, budget: SceneBudget) -> List[str]:
    return [
        "SCENE COUNT RULE (THE MOST IMPORTANT ORDER):",
        f"- For the requested {duration_minutes} minutes, the total number of scenes (intro + body + outro) "
        f"MUST be between {budget.min} and {budget.max} scenes, aiming for {budget.target}.",
        "- This is an absolute order, not a suggestion. A scene count outside this range is a complete failure.",
        "- Design the story to fit the scene budget: stretch or tighten the pacing. Do not write the story "
        "first and count scenes afterwards.",
        "- Distribute the scenes sensibly over intro, body and outro. 'sceneNumber' starts at 1, increases "
        "by one and never resets between sections.",
        "",
    ]


def _closing_rules() -> List[str]:
    return [
        "OTHER HARD REQUIREMENTS:",
        f"- Dialogue length (CRITICAL): each scene lasts at most 8 seconds, so 'dialogue' MUST NOT exceed "
        f"{MAX_DIALOGUE_WORDS} words (about {MAX_DIALOGUE_CHARS} characters).",
        "",
        "Return a single valid JSON object that follows the schema. No explanatory text.",
    ]
