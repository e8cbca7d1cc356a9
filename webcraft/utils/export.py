"""Download helpers for generated websites."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from webcraft.core.models import GenerationResult

HTML_MEDIA_TYPE = "text/html"


@dataclass(frozen=True)
class ExportedFile:
    filename: str
    content: str
    media_type: str = HTML_MEDIA_TYPE

    def write_to(self, directory: Path) -> Path:
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        target = directory / self.filename
        target.write_text(self.content, encoding="utf-8")
        return target


def export_filename(title: str) -> str:
    """'My  Portfolio Website' -> 'my-portfolio-website.html'"""
    slug = re.sub(r"\s+", "-", title.lower())
    return f"{slug}.html"


def export_artifact(artifact: GenerationResult) -> ExportedFile:
    return ExportedFile(filename=export_filename(artifact.title), content=artifact.code)


__all__ = ["ExportedFile", "export_filename", "export_artifact", "HTML_MEDIA_TYPE"]
