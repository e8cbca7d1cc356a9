"""Shared fixtures: stub model engines and stores on a temp directory."""

from __future__ import annotations

from typing import List, Optional

import pytest

from webcraft.core.errors import ProviderError
from webcraft.core.llm_engine import LLMEngine
from webcraft.core.models import GenerationResult
from webcraft.storage.artifact_store import JsonArtifactStore, MemoryArtifactStore


class StubEngine(LLMEngine):
    """Records every instruction and answers with a canned reply."""

    model_name = "stub"

    def __init__(self, reply: str = "<html></html>", configured: bool = True, error: Optional[Exception] = None):
        self.reply = reply
        self.configured = configured
        self.error = error
        self.calls: List[str] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    def ask(self, prompt: str) -> str:
        self.calls.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def stub_engine() -> StubEngine:
    return StubEngine(reply="```html\n<html>...</html>\n```")


@pytest.fixture
def failing_engine() -> StubEngine:
    return StubEngine(error=ProviderError("Gemini API error: 503 Service Unavailable"))


@pytest.fixture
def memory_store() -> MemoryArtifactStore:
    return MemoryArtifactStore()


@pytest.fixture
def json_store(tmp_path) -> JsonArtifactStore:
    return JsonArtifactStore.in_directory(tmp_path)


def make_result(index: int, title: str = "Generated Website") -> GenerationResult:
    return GenerationResult(
        id=f"id-{index:03d}",
        prompt=f"prompt {index}",
        title=title,
        created_at=f"2024-01-01T00:00:{index % 60:02d}Z",
        code=f"<html>{index}</html>",
    )


@pytest.fixture(name="make_result")
def make_result_fixture():
    return make_result
