"""Utilities for cleaning generated markup from LLM artifacts."""

import re

# Opening fence with an optional markup language tag, or a bare closing fence.
_FENCE_RE = re.compile(r"```[ \t]*(?:xhtml|html?|xml)?", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """
    Remove every markdown code fence marker, wherever it appears.

    Removing one marker can glue stray backticks into a new one
    (e.g. "`" + "```html" + "``"), so substitute until nothing changes.
    """
    previous = None
    cleaned = text
    while cleaned != previous:
        previous = cleaned
        cleaned = _FENCE_RE.sub("", cleaned)
    return cleaned


def sanitize(raw_text: str) -> str:
    """Turn a raw model reply into renderable markup."""
    return strip_code_fences(raw_text or "").strip()


__all__ = ["strip_code_fences", "sanitize"]
