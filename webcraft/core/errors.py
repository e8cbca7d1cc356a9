"""Error taxonomy shared by the pipeline, the store and the HTTP boundary."""

from __future__ import annotations

PROMPT_REQUIRED_MESSAGE = "Prompt is required"
API_KEY_MISSING_MESSAGE = "Gemini API key not configured"
GENERATION_FAILED_MESSAGE = "Failed to generate website. Please try again."


class WebCraftError(Exception):
    """Base class for all errors raised by webcraft."""


class ValidationError(WebCraftError):
    """Bad or empty user input. Correctable by the user, never retried."""

    def __init__(self, message: str = PROMPT_REQUIRED_MESSAGE) -> None:
        super().__init__(message)


class ModelFailure(WebCraftError):
    """The model gateway could not produce text."""


class ConfigurationError(ModelFailure):
    """Deployment problem, e.g. the Gemini API key is not set."""

    def __init__(self, message: str = API_KEY_MISSING_MESSAGE) -> None:
        super().__init__(message)


class ProviderError(ModelFailure):
    """The external model failed or returned nothing usable. Callers may retry."""


class GenerationInProgressError(WebCraftError):
    """A session already has a generation in flight."""


class DuplicateArtifactError(WebCraftError, ValueError):
    """An artifact with the same id is already stored."""


__all__ = [
    "WebCraftError",
    "ValidationError",
    "ModelFailure",
    "ConfigurationError",
    "ProviderError",
    "GenerationInProgressError",
    "DuplicateArtifactError",
    "PROMPT_REQUIRED_MESSAGE",
    "API_KEY_MISSING_MESSAGE",
    "GENERATION_FAILED_MESSAGE",
]
