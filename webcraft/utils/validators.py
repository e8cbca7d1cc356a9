"""Validation helpers for user input."""

from __future__ import annotations

from typing import Any

from webcraft.core.errors import ValidationError


def is_prompt_valid(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def require_prompt(value: Any) -> str:
    """Return the prompt unchanged, or raise ValidationError if it is blank."""
    if not is_prompt_valid(value):
        raise ValidationError()
    return value


__all__ = ["is_prompt_valid", "require_prompt"]
