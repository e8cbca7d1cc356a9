"""Unit tests for the model gateway, with the Gemini SDK replaced by fakes."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from webcraft.config import ModelSettings
from webcraft.core.errors import ConfigurationError, ModelFailure, ProviderError
from webcraft.core.llm_engine import GeminiEngine, MockLLMEngine, create_engine
from webcraft.core.prompt_templates import enrich
from webcraft.utils.markup_cleaner import sanitize

API_KEY = "AIza-test-secret-key"


class FakeModel:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def generate_content(self, prompt, generation_config=None):
        self.calls.append((prompt, generation_config))
        if self.error is not None:
            raise self.error
        return self.response


class BlockedResponse:
    """Mimics a response whose .text accessor raises, as the SDK does for multi-part replies."""

    def __init__(self, parts):
        self.candidates = [SimpleNamespace(content=SimpleNamespace(parts=parts))]

    @property
    def text(self):
        raise ValueError("response has multiple parts")


def gemini_with(model: FakeModel) -> GeminiEngine:
    engine = GeminiEngine(api_key=API_KEY, model_name="gemini-test")
    engine._model = model
    return engine


class TestGeminiEngine:
    def test_missing_key_is_configuration_error(self):
        engine = GeminiEngine(api_key="")
        assert not engine.is_configured
        with pytest.raises(ConfigurationError) as excinfo:
            engine.generate("hello")
        assert isinstance(excinfo.value, ModelFailure)
        assert str(excinfo.value) == "Gemini API key not configured"

    def test_returns_text(self):
        model = FakeModel(response=SimpleNamespace(text="  <html></html>  "))
        engine = gemini_with(model)
        assert engine.generate("make a site") == "<html></html>"
        prompt, config = model.calls[0]
        assert prompt == "make a site"
        assert set(config) == {"temperature", "top_p", "max_output_tokens"}

    def test_falls_back_to_candidate_parts(self):
        parts = [SimpleNamespace(text="<html>"), SimpleNamespace(text=None), SimpleNamespace(text="</html>")]
        engine = gemini_with(FakeModel(response=BlockedResponse(parts)))
        assert engine.generate("x") == "<html></html>"

    def test_empty_reply_is_provider_error(self):
        engine = gemini_with(FakeModel(response=BlockedResponse([])))
        with pytest.raises(ProviderError):
            engine.generate("x")

    def test_sdk_error_is_provider_error_without_key(self):
        error = RuntimeError(f"403 permission denied for key {API_KEY}")
        engine = gemini_with(FakeModel(error=error))
        with pytest.raises(ProviderError) as excinfo:
            engine.generate("x")
        assert API_KEY not in str(excinfo.value)
        assert "***" in str(excinfo.value)
        assert excinfo.value.__cause__ is None

    def test_no_retry(self):
        model = FakeModel(error=RuntimeError("boom"))
        with pytest.raises(ProviderError):
            gemini_with(model).generate("x")
        assert len(model.calls) == 1


class TestMockEngine:
    def test_replies_with_fenced_document(self):
        reply = MockLLMEngine().generate(enrich("a <b>bold</b> blog"))
        assert reply.startswith("```html")
        markup = sanitize(reply)
        assert markup.startswith("<!DOCTYPE html>")
        assert "Blog Website" in markup
        assert "&lt;b&gt;bold&lt;/b&gt;" in markup


class TestCreateEngine:
    def test_mock_provider(self):
        assert isinstance(create_engine(model_cfg=ModelSettings(provider="mock")), MockLLMEngine)

    def test_gemini_provider_without_key(self):
        engine = create_engine(model_cfg=ModelSettings(provider="gemini", gemini_api_key=None))
        assert isinstance(engine, GeminiEngine)
        assert not engine.is_configured

    def test_model_name_override(self):
        cfg = ModelSettings(provider="gemini", gemini_api_key="k")
        assert create_engine(model_name="gemini-2.5-pro", model_cfg=cfg).model_name == "gemini-2.5-pro"
