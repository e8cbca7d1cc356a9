"""Coordinates prompt enrichment, the model call and result assembly."""

from __future__ import annotations

import asyncio
from typing import Optional

from webcraft.core.errors import ConfigurationError, ModelFailure, ProviderError
from webcraft.core.llm_engine import LLMEngine, create_engine
from webcraft.core.models import GenerationResult
from webcraft.core.prompt_templates import enrich
from webcraft.utils.logger import logger
from webcraft.utils.markup_cleaner import sanitize
from webcraft.utils.title import DEFAULT_TITLE, infer_title
from webcraft.utils.validators import require_prompt


class GenerationPipeline:
    """
    Turns a raw prompt into a GenerationResult.

    Holds no per-request state, so one instance can serve concurrent callers.
    Raises ValidationError, ConfigurationError or ProviderError.
    """

    def __init__(self, engine: Optional[LLMEngine] = None, model_name: Optional[str] = None):
        self.engine = engine or create_engine(model_name=model_name)

    def _prepare(self, raw_prompt: str) -> str:
        require_prompt(raw_prompt)
        if not self.engine.is_configured:
            logger.error("Generation refused: Gemini API key is not configured")
            raise ConfigurationError()
        return enrich(raw_prompt)

    def _call_engine(self, instruction: str) -> str:
        try:
            return self.engine.generate(instruction)
        except ModelFailure:
            raise
        except Exception as exc:
            logger.exception("Unexpected model gateway failure")
            raise ProviderError(f"Model gateway failed: {type(exc).__name__}") from exc

    def _assemble(self, raw_prompt: str, reply: str, fallback_title: Optional[str]) -> GenerationResult:
        title = infer_title(raw_prompt) or fallback_title or DEFAULT_TITLE
        result = GenerationResult.create(prompt=raw_prompt, title=title, code=sanitize(reply))
        logger.info("Generated '{}' ({} chars of markup)", result.title, len(result.code))
        return result

    def run(self, raw_prompt: str, fallback_title: Optional[str] = None) -> GenerationResult:
        """
        Generate one website.

        `fallback_title` is accepted so the pipeline and RemoteGenerator share a
        signature; `infer_title` always yields a title, so in-process runs never use it.
        """
        instruction = self._prepare(raw_prompt)
        logger.info("Generating website with {}", self.engine.model_name)
        reply = self._call_engine(instruction)
        return self._assemble(raw_prompt, reply, fallback_title)

    async def arun(self, raw_prompt: str, fallback_title: Optional[str] = None) -> GenerationResult:
        """Async variant; the model call runs in a worker thread and is the only await point."""
        instruction = self._prepare(raw_prompt)
        logger.info("Generating website with {}", self.engine.model_name)
        reply = await asyncio.to_thread(self._call_engine, instruction)
        return self._assemble(raw_prompt, reply, fallback_title)


__all__ = ["GenerationPipeline"]
