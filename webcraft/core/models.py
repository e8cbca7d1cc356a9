"""Records produced by the generation pipeline."""

from __future__ import annotations

import time
import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


def new_artifact_id() -> str:
    """Time-ordered unique id: nanosecond clock plus a random suffix."""
    return f"{time.time_ns()}-{uuid.uuid4().hex[:8]}"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class GenerationResult(BaseModel):
    """A generated website as stored in the history (an artifact)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1)
    prompt: str
    title: str = Field(..., min_length=1)
    created_at: str = Field(..., alias="createdAt")
    code: str

    @classmethod
    def create(cls, prompt: str, title: str, code: str) -> "GenerationResult":
        return cls(id=new_artifact_id(), prompt=prompt, title=title, created_at=utc_now_iso(), code=code)

    def to_record(self) -> dict:
        """JSON-compatible shape used by the durable store."""
        return self.model_dump(by_alias=True)


__all__ = ["GenerationResult", "new_artifact_id", "utc_now_iso"]
