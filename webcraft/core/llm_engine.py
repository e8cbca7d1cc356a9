"""Model gateway: the only place that talks to the generative model."""

from __future__ import annotations

import html
import re
from typing import Any, Optional

from webcraft.config import ModelSettings, settings
from webcraft.core import prompt_templates
from webcraft.core.errors import ConfigurationError, ProviderError
from webcraft.utils.logger import logger, mask_secrets, register_secret
from webcraft.utils.title import infer_title

_DESCRIPTION_RE = re.compile(r'description: "(.*)"\n', re.DOTALL)


class LLMEngine:
    """Interface for all model providers."""

    model_name: Optional[str] = None

    @property
    def is_configured(self) -> bool:
        """True when the engine has everything it needs to make a call."""
        return True

    def ask(self, prompt: str) -> str:  # pragma: no cover - interface
        raise NotImplementedError

    def generate(self, instruction: str) -> str:
        """Return the model reply, raising ProviderError when it is empty."""
        reply = self.ask(instruction)
        if not reply or not reply.strip():
            logger.warning("{} returned an empty response", type(self).__name__)
            raise ProviderError("Model returned an empty response")
        return reply


class MockLLMEngine(LLMEngine):
    """Offline engine that answers with a small fenced HTML document."""

    model_name = "mock"

    def ask(self, prompt: str) -> str:
        match = _DESCRIPTION_RE.search(prompt)
        description = match.group(1) if match else prompt.strip()
        return prompt_templates.MOCK_DOCUMENT.format(
            title=html.escape(infer_title(description)),
            description=html.escape(description),
        )


class GeminiEngine(LLMEngine):
    """Runs inference via Google Gemini API."""

    def __init__(
        self,
        model_name: str | None = None,
        api_key: str | None = None,
        model_cfg: ModelSettings | None = None,
    ) -> None:
        model_cfg = model_cfg or settings.model
        self.api_key = api_key if api_key is not None else model_cfg.gemini_api_key
        self.model_name = model_name or model_cfg.gemini_model_name
        self.generation_config = {
            "temperature": model_cfg.temperature,
            "top_p": model_cfg.top_p,
            "max_output_tokens": model_cfg.max_new_tokens,
        }
        self._model: Any = None
        register_secret(self.api_key)
        if self.is_configured:
            logger.info("Initialized Gemini engine for model {}", self.model_name)
        else:
            logger.warning("Gemini engine created without an API key")

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _get_model(self) -> Any:
        if not self.is_configured:
            raise ConfigurationError()
        if self._model is None:
            import google.generativeai as genai

            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(self.model_name)
        return self._model

    def ask(self, prompt: str) -> str:
        model = self._get_model()

        try:
            response = model.generate_content(prompt, generation_config=self.generation_config)
        except Exception as exc:
            reason = mask_secrets(f"{type(exc).__name__}: {exc}")
            logger.error("Gemini API request failed: {}", reason)
            raise ProviderError(f"Gemini API error: {reason}") from None

        # response.text raises ValueError when the candidate was blocked or has several parts
        try:
            text = response.text
            if text:
                return text.strip()
        except (ValueError, AttributeError):
            pass

        candidates = getattr(response, "candidates", None)
        if candidates:
            candidate = candidates[0]
            if hasattr(candidate, "content") and hasattr(candidate.content, "parts"):
                parts_text = [part.text for part in candidate.content.parts if getattr(part, "text", None)]
                if parts_text:
                    return "".join(parts_text).strip()

        return ""


def create_engine(model_name: str | None = None, model_cfg: ModelSettings | None = None) -> LLMEngine:
    """
    Create a model engine instance.

    Args:
        model_name: Optional Gemini model override, e.g. 'gemini-2.5-pro'.
        model_cfg: Settings to use instead of the process-wide ones.

    Returns:
        LLMEngine instance. A Gemini engine without a key is still returned so
        that callers can report the setup problem instead of silently mocking.
    """
    model_cfg = model_cfg or settings.model
    if model_cfg.provider == "mock":
        return MockLLMEngine()
    return GeminiEngine(model_name=model_name, model_cfg=model_cfg)


__all__ = ["LLMEngine", "MockLLMEngine", "GeminiEngine", "create_engine"]
