"""Shared base for models exchanged with the model and the library."""

from pydantic import BaseModel

# Fixed per-field language assignment of the output contract.
DESCRIPTIVE_LANGUAGE = "English"
NARRATIVE_LANGUAGE = "Vietnamese"


class WireModel(BaseModel):
    """Model whose JSON field names differ from its attribute names.

    Accepts either name on input and always serializes by alias.
    """

    class Config:
        """Pydantic config."""
        populate_by_name = True
        frozen = False

    def to_dict(self) -> dict:
        """Return a JSON-compatible dict keyed by wire names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON keyed by wire names."""
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)
