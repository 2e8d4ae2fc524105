"""Configuration management."""

import os
from pathlib import Path
from pydantic import BaseModel, Field
from dotenv import load_dotenv

from .errors import ConfigurationError

# Load environment variables
load_dotenv()

PROVIDERS = ("gemini", "anthropic")


class Config(BaseModel):
    """Application configuration."""

    # Provider selection
    provider: str = Field(
        default_factory=lambda: os.getenv("SCRIPTGEN_PROVIDER", "gemini").lower(),
        description="Generation backend: 'gemini' or 'anthropic'"
    )

    # API Keys
    gemini_api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY", ""),
        description="Gemini API key (AI Studio backend)"
    )
    gemini_backend: str = Field(
        default_factory=lambda: os.getenv("GEMINI_BACKEND", "aistudio").lower(),
        description="Gemini backend: 'aistudio' or 'vertex'"
    )
    google_cloud_project: str = Field(
        default_factory=lambda: os.getenv("GOOGLE_CLOUD_PROJECT", ""),
        description="Google Cloud project ID (Vertex AI backend)"
    )
    google_cloud_location: str = Field(
        default_factory=lambda: os.getenv("GOOGLE_CLOUD_LOCATION", "us-central1"),
        description="Google Cloud region (Vertex AI backend)"
    )
    anthropic_api_key: str = Field(
        default_factory=lambda: os.getenv("ANTHROPIC_API_KEY", ""),
        description="Anthropic API key"
    )

    # Paths
    workspace: Path = Field(
        default_factory=lambda: Path(os.getenv("SCRIPTGEN_WORKSPACE", ".")),
        description="Workspace directory"
    )
    library_path: Path = Field(
        default_factory=lambda: Path(
            os.getenv("SCRIPTGEN_LIBRARY")
            or Path(os.getenv("SCRIPTGEN_WORKSPACE", ".")) / "script_library.json"
        ),
        description="JSON file holding saved scripts"
    )

    # Model settings
    script_model: str = Field(
        default_factory=lambda: os.getenv("SCRIPTGEN_SCRIPT_MODEL", "gemini-2.5-pro"),
        description="Gemini model used for script generation"
    )
    keyword_model: str = Field(
        default_factory=lambda: os.getenv("SCRIPTGEN_KEYWORD_MODEL", "gemini-2.5-flash"),
        description="Gemini model used for keyword suggestion"
    )
    anthropic_model: str = Field(
        default_factory=lambda: os.getenv("SCRIPTGEN_ANTHROPIC_MODEL", "claude-sonnet-4-20250514"),
        description="Claude model used when provider is 'anthropic'"
    )
    temperature: float = Field(
        default_factory=lambda: float(os.getenv("SCRIPTGEN_TEMPERATURE", "0.8")),
        description="Sampling temperature for script generation",
        ge=0.0,
        le=2.0,
    )

    class Config:
        """Pydantic config."""
        frozen = False

    def validate_required(self) -> None:
        """Validate that the credentials for the selected provider are set.

        Raises:
            ConfigurationError: If the provider is unknown or its settings are missing.
        """
        if self.provider not in PROVIDERS:
            raise ConfigurationError(
                f"Unknown SCRIPTGEN_PROVIDER: {self.provider}. "
                f"Must be one of: {', '.join(PROVIDERS)}"
            )

        missing: list[str] = []

        if self.provider == "anthropic":
            if not self.anthropic_api_key:
                missing.append("ANTHROPIC_API_KEY")
        elif self.gemini_backend == "vertex":
            if not self.google_cloud_project:
                missing.append("GOOGLE_CLOUD_PROJECT")
        elif not self.gemini_api_key:
            missing.append("GEMINI_API_KEY")

        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}. "
                "Set the corresponding environment variables."
            )


# Global config instance
config = Config()
