"""WebCraft AI: generate websites from a natural language description."""

__version__ = "1.0.0"
