"""FastAPI application exposing the website generation pipeline."""

from typing import Any, Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from webcraft import __version__
from webcraft.config import settings
from webcraft.core.errors import (
    API_KEY_MISSING_MESSAGE,
    GENERATION_FAILED_MESSAGE,
    PROMPT_REQUIRED_MESSAGE,
    ConfigurationError,
    ValidationError,
)
from webcraft.core.llm_engine import LLMEngine
from webcraft.core.pipeline import GenerationPipeline
from webcraft.utils.logger import logger


class GenerateWebsiteResponse(BaseModel):
    success: bool = True
    code: str
    title: str


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _read_prompt(request: Request) -> Any:
    """Return body["prompt"], or None when the body is not a JSON object."""
    try:
        payload = await request.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    return payload.get("prompt")


def create_app(engine: Optional[LLMEngine] = None) -> FastAPI:
    """Build the application; pass an engine to replace the configured Gemini one."""
    app = FastAPI(
        title=settings.app.name,
        description="Generate complete websites from a natural language description with Gemini",
        version=__version__,
    )
    app.state.pipeline = GenerationPipeline(engine=engine)

    @app.get("/")
    async def root():
        """Service banner."""
        return {"status": "ok", "service": settings.app.name, "version": __version__}

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "model_configured": app.state.pipeline.engine.is_configured}

    @app.post("/api/generate-website", response_model=GenerateWebsiteResponse)
    async def generate_website(request: Request):
        """
        Generate a website from {"prompt": "..."}.

        Errors are reported as {"error": "..."}: 400 for a missing prompt,
        500 for a missing API key or any model failure.
        """
        prompt = await _read_prompt(request)
        pipeline: GenerationPipeline = app.state.pipeline

        try:
            result = await pipeline.arun(prompt)
        except ValidationError:
            return error_response(status.HTTP_400_BAD_REQUEST, PROMPT_REQUIRED_MESSAGE)
        except ConfigurationError:
            logger.error("Gemini API key is not configured; set GEMINI_API_KEY")
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, API_KEY_MISSING_MESSAGE)
        except Exception as exc:
            logger.error("Error generating website: {}", exc)
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERATION_FAILED_MESSAGE)

        return GenerateWebsiteResponse(code=result.code, title=result.title)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "webcraft.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.app.debug,
    )
