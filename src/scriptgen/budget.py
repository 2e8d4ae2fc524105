"""Scene budget calculation.

Every scene is a fixed 8-second unit of screen time, so a requested duration
in minutes maps directly onto a scene count. The permitted range spans one
minute either side of the request, never dropping below one minute.
"""

import math

from pydantic import BaseModel, Field

SCENE_SECONDS = 8
MIN_BUDGET_MINUTES = 1


class SceneBudget(BaseModel):
    """Target scene count and the permitted [min, max] range."""

    target: int = Field(..., description="Scene count for the requested duration", ge=0)
    min: int = Field(..., description="Fewest scenes allowed", ge=0)
    max: int = Field(..., description="Most scenes allowed", ge=0)

    class Config:
        """Pydantic config."""
        frozen = True

    def allows(self, scene_count: int) -> bool:
        """Return True when scene_count falls inside [min, max]."""
        return self.min <= scene_count <= self.max


def scenes_for_minutes(minutes: int) -> int:
    """Convert minutes to a scene count, rounding halves up."""
    return math.floor(minutes * 60 / SCENE_SECONDS + 0.5)


def scene_budget(minutes: int) -> SceneBudget:
    """Compute the scene budget for a duration in whole minutes.

    Args:
        minutes: Requested duration, at least 1.

    Returns:
        SceneBudget with target, min and max scene counts.

    Raises:
        ValueError: If minutes is below 1.
    """
    if minutes < 1:
        raise ValueError(f"Duration must be at least 1 minute, got {minutes}")

    return SceneBudget(
        target=scenes_for_minutes(minutes),
        min=scenes_for_minutes(max(MIN_BUDGET_MINUTES, minutes - 1)),
        max=scenes_for_minutes(minutes + 1),
    )
