"""Exceptions raised by the generation core."""


class ScriptgenError(Exception):
    """Base exception for all scriptgen errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(ScriptgenError):
    """Raised when required settings or credentials are missing."""
    pass


class RequestError(ScriptgenError, ValueError):
    """Raised when a generation request is missing mode-specific fields.

    Always raised before anything is sent to the model.
    """
    pass


class InvalidAIResponseError(ScriptgenError, ValueError):
    """Raised when the model output does not satisfy the output contract."""

    def __init__(self, message: str = "AI returned an invalid response. Please try again.", details: dict = None):
        super().__init__(message, details)
