"""Series bible (continuity record) model."""

from typing import Tuple
from pydantic import Field

from .base import WireModel
from .script import CharacterProfile, ScriptOverview


class BibleCharacter(CharacterProfile):
    """Immutable character profile inside a series bible.

    Keys beyond the standard profile fields are kept and written back out.
    """

    class Config:
        """Pydantic config."""
        frozen = True
        extra = "allow"


class SeriesBible(WireModel):
    """Immutable cross-episode record of characters, visual style, tone and setting.

    Created once, when a fresh analysis succeeds, by projecting the script
    overview. Continuation requests supply it verbatim and get it back
    unchanged: only wire names are accepted, and unknown keys are preserved.
    """

    characters: Tuple[BibleCharacter, ...] = Field(..., alias="ho_so_nhan_vat")
    visual_style: str = Field(..., alias="phong_cach_hinh_anh")
    tone: str = Field(..., alias="tong_giong")
    setting: str = Field(..., alias="boi_canh_chung")

    class Config:
        """Pydantic config."""
        frozen = True
        extra = "allow"
        populate_by_name = False

    @classmethod
    def from_overview(cls, overview: ScriptOverview) -> "SeriesBible":
        """Project the continuity fields out of a script overview."""
        return cls.model_validate({
            "ho_so_nhan_vat": [profile.to_dict() for profile in overview.characters],
            "phong_cach_hinh_anh": overview.visual_style,
            "tong_giong": overview.tone,
            "boi_canh_chung": overview.setting,
        })

    def to_dict(self) -> dict:
        """Return the bible keyed by wire names, extra keys included."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self, indent: int = 2) -> str:
        """Serialize the bible, extra keys included."""
        return self.model_dump_json(by_alias=True, indent=indent)

    def character(self, name: str) -> BibleCharacter:
        """Look up a character profile by name.

        Raises:
            KeyError: If no character has that name.
        """
        for profile in self.characters:
            if profile.name == name:
                return profile
        raise KeyError(name)
