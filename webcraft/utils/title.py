"""Display titles derived from the user's prompt."""

from __future__ import annotations

from typing import Callable, FrozenSet, List, Tuple

DEFAULT_TITLE = "Generated Website"

Predicate = Callable[[FrozenSet[str]], bool]


def _has_any(*keywords: str) -> Predicate:
    return lambda words: any(keyword in words for keyword in keywords)


# Order matters: first match wins ("a saas landing and blog page" is a blog).
TITLE_RULES: List[Tuple[Predicate, str]] = [
    (_has_any("portfolio"), "Portfolio Website"),
    (_has_any("restaurant"), "Restaurant Website"),
    (_has_any("blog"), "Blog Website"),
    (_has_any("ecommerce", "shop"), "E-commerce Website"),
    (_has_any("landing"), "Landing Page"),
    (_has_any("saas"), "SaaS Website"),
    (_has_any("business"), "Business Website"),
]


def infer_title(raw_prompt: str) -> str:
    words = frozenset((raw_prompt or "").lower().split())
    for matches, title in TITLE_RULES:
        if matches(words):
            return title
    return DEFAULT_TITLE


def fallback_title(position: int) -> str:
    """Positional title used when nothing better is known, e.g. 'Website 3'."""
    return f"Website {position}"


__all__ = ["DEFAULT_TITLE", "TITLE_RULES", "infer_title", "fallback_title"]
