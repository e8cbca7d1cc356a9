"""Per-session state: history, selection and the single in-flight generation."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from webcraft.core.errors import GenerationInProgressError
from webcraft.core.models import GenerationResult
from webcraft.storage.artifact_store import ArtifactStore
from webcraft.storage.session_store import SessionStore, StaticSessionStore
from webcraft.utils.export import ExportedFile, export_artifact
from webcraft.utils.logger import logger
from webcraft.utils.title import fallback_title


class Generator(Protocol):
    def run(self, raw_prompt: str, fallback_title: Optional[str] = None) -> GenerationResult:
        ...


@dataclass
class SessionContext:
    """
    Everything one user session owns.

    Created on session start (`start`), dropped on session end (`close`).
    Only one generation may be in flight at a time; a second call raises
    GenerationInProgressError instead of queueing.
    """

    generator: Generator
    artifacts: ArtifactStore
    sessions: SessionStore = field(default_factory=StaticSessionStore)
    selected_id: Optional[str] = None
    _in_flight: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _closed: bool = field(default=False, init=False)

    def start(self) -> List[GenerationResult]:
        history = self.artifacts.load()
        self._closed = False
        logger.info("Session started with {} stored website(s)", len(history))
        return history

    def close(self) -> None:
        self._closed = True
        self.selected_id = None

    @property
    def is_generating(self) -> bool:
        return self._in_flight.locked()

    @property
    def display_name(self) -> Optional[str]:
        return self.sessions.display_name()

    def history(self) -> List[GenerationResult]:
        return self.artifacts.list()

    def generate(self, raw_prompt: str) -> Optional[GenerationResult]:
        """Run one generation and record it. Returns None if the session closed meanwhile."""
        if not self._in_flight.acquire(blocking=False):
            raise GenerationInProgressError("A website is already being generated")
        try:
            result = self.generator.run(raw_prompt, fallback_title=fallback_title(len(self.artifacts) + 1))
            if self._closed:
                logger.info("Session closed during generation, discarding {}", result.id)
                return None
            self.artifacts.append(result)
            self.selected_id = result.id
            return result
        finally:
            self._in_flight.release()

    def select(self, artifact_id: Optional[str]) -> Optional[GenerationResult]:
        artifact = self.artifacts.select(artifact_id)
        self.selected_id = artifact.id if artifact else None
        return artifact

    @property
    def selected(self) -> Optional[GenerationResult]:
        """The selected artifact, or None if it was evicted or cleared."""
        artifact = self.artifacts.select(self.selected_id)
        if artifact is None:
            self.selected_id = None
        return artifact

    def export_selected(self) -> Optional[ExportedFile]:
        artifact = self.selected
        return export_artifact(artifact) if artifact else None

    def clear_history(self) -> None:
        self.artifacts.clear()
        self.selected_id = None


__all__ = ["Generator", "SessionContext"]
