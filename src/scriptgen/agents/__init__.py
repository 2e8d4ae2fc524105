"""AI agents for script generation."""

from .base import BaseAgent
from .directives import Directive, build_directive
from .keywords import KeywordAgent
from .scriptwriter import ScriptwriterAgent

__all__ = ["BaseAgent", "Directive", "build_directive", "KeywordAgent", "ScriptwriterAgent"]
