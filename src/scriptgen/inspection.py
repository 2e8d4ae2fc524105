"""Diagnostics for generated scripts.

The scene budget, numbering and dialogue ceiling are instructions to the
model, not enforced contracts. These checks report where a script drifted
from them so the caller can decide what to do; nothing here rejects a result.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .budget import SceneBudget
from .models import Script, SeriesBible
from .models.scene import MAX_DIALOGUE_CHARS, MAX_DIALOGUE_WORDS


@dataclass
class InspectionReport:
    """Findings for one script."""

    scene_count: int
    warnings: List[str] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        return not self.warnings

    def __str__(self) -> str:
        if self.clean:
            return f"{self.scene_count} scenes, no issues"
        lines = [f"{self.scene_count} scenes, {len(self.warnings)} issue(s):"]
        lines.extend(f"  - {warning}" for warning in self.warnings)
        return "\n".join(lines)


def inspect_script(
    script: Script,
    budget: Optional[SceneBudget] = None,
    bible: Optional[SeriesBible] = None,
) -> InspectionReport:
    """Check a script against the rules given to the model.

    Args:
        script: Script to inspect.
        budget: Scene budget of the request, if known.
        bible: Series bible whose visual style must prefix every image prompt.
            Defaults to the script's own overview style.
    """
    scenes = script.scenes()
    report = InspectionReport(scene_count=len(scenes))

    numbers = [scene.scene_number for scene in scenes]
    expected = list(range(1, len(scenes) + 1))
    if numbers != expected:
        report.warnings.append(
            f"scene numbers are not contiguous from 1: {_preview(numbers)}"
        )

    if budget is not None and not budget.allows(len(scenes)):
        report.warnings.append(
            f"{len(scenes)} scenes is outside the budget [{budget.min}, {budget.max}]"
        )

    visual_style = (bible.visual_style if bible else script.overview.visual_style).strip()
    for scene in scenes:
        dialogue = scene.motion_prompt.dialogue
        words = scene.motion_prompt.dialogue_word_count()
        if words > MAX_DIALOGUE_WORDS or len(dialogue) > MAX_DIALOGUE_CHARS:
            report.warnings.append(
                f"scene {scene.scene_number}: dialogue has {words} words / {len(dialogue)} characters"
            )
        if visual_style and not scene.image_prompt.strip().startswith(visual_style):
            report.warnings.append(
                f"scene {scene.scene_number}: image prompt does not start with the visual style"
            )

    return report


def _preview(numbers: List[int], limit: int = 12) -> str:
    shown = ", ".join(str(n) for n in numbers[:limit])
    return f"[{shown}, ...]" if len(numbers) > limit else f"[{shown}]"
