"""Scene data models."""

from typing import Optional
from pydantic import Field

from .base import DESCRIPTIVE_LANGUAGE, NARRATIVE_LANGUAGE, WireModel

MAX_DIALOGUE_WORDS = 20
MAX_DIALOGUE_CHARS = 100


class MotionPrompt(WireModel):
    """Structured motion directive for one scene."""

    character: str = Field(
        ...,
        description=(
            f"Description of all characters in the scene, in {DESCRIPTIVE_LANGUAGE}. "
            "CRITICAL: must START WITH the full descriptions ('description' followed by "
            "'appearance') from the profile of EACH character present."
        ),
    )
    setting: str = Field(
        ...,
        description=(
            f"Very detailed description of the immediate environment and atmosphere, in "
            f"{DESCRIPTIVE_LANGUAGE}, including specific objects and overall feel."
        ),
    )
    lighting: str = Field(
        ...,
        description=f"Detailed lighting that creates a specific mood, in {DESCRIPTIVE_LANGUAGE}.",
    )
    action: str = Field(
        ...,
        description=f"Specific, evocative description of the characters' actions, in {DESCRIPTIVE_LANGUAGE}.",
    )
    dialogue: str = Field(
        ...,
        description=(
            "Dialogue for the scene, written only in the requested dialogue language and in a "
            "style matching each speaker's 'voice_profile'. If several characters speak, prefix "
            "each line with the speaker's name (e.g. 'An: Hello mum! Mum: Hello, darling.'). "
            f"At most {MAX_DIALOGUE_WORDS} words (about {MAX_DIALOGUE_CHARS} characters) so the "
            "scene stays under 8 seconds."
        ),
    )
    camera_movement: str = Field(
        ...,
        description=f"Camera movement complementing the action and mood, in {DESCRIPTIVE_LANGUAGE}.",
    )
    sound_effects: str = Field(
        ...,
        description=f"Relevant sound effects, including subtle atmospheric sounds, in {DESCRIPTIVE_LANGUAGE}.",
    )
    background_music: str = Field(
        ...,
        description=f"Style or mood of the background music, in {DESCRIPTIVE_LANGUAGE}.",
    )
    secondary_character_details: Optional[str] = Field(
        None,
        description=(
            "OPTIONAL. Appearance and actions/reactions of any secondary character in this "
            f"scene, in {DESCRIPTIVE_LANGUAGE}."
        ),
    )
    visuals_notes: str = Field(
        ...,
        description=f"Important production or visual notes for this scene, in {NARRATIVE_LANGUAGE}.",
    )
    negative_motion_prompt: str = Field(
        ...,
        alias="negativeMotionPrompt",
        description=(
            "Comprehensive negative prompt for unwanted motion elements (e.g. 'shaky camera, "
            f"flickering lights, inconsistent character appearance'), in {DESCRIPTIVE_LANGUAGE}."
        ),
    )

    def dialogue_word_count(self) -> int:
        """Return the number of whitespace-separated words in the dialogue."""
        return len(self.dialogue.split())


class Scene(WireModel):
    """A single 8-second narrative unit."""

    scene_number: int = Field(
        ...,
        alias="sceneNumber",
        description="Scene number, starting at 1 and increasing continuously across all sections.",
    )
    setting: str = Field(
        ...,
        description=f"Setting or location of the scene, in {NARRATIVE_LANGUAGE}.",
    )
    image_prompt: str = Field(
        ...,
        alias="imagePrompt",
        description=(
            f"Highly detailed prompt for an image generation model, in {DESCRIPTIVE_LANGUAGE}. "
            "CRITICAL: a synthesis of, in order: 1. the full visual style string; 2. the full "
            "description ('description' + 'appearance') of ALL characters present; 3. the "
            "setting, lighting, action and secondary character details of this scene's motionPrompt."
        ),
    )
    negative_image_prompt: str = Field(
        ...,
        alias="negativeImagePrompt",
        description=(
            f"Negative prompt for the image generation model, in {DESCRIPTIVE_LANGUAGE} "
            "(e.g. 'deformed, blurry, extra limbs, bad hands')."
        ),
    )
    motion_prompt: MotionPrompt = Field(..., alias="motionPrompt")
