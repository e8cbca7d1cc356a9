"""Centralized configuration objects for WebCraft AI."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load .env file if it exists
PROJECT_ROOT = Path(__file__).resolve().parents[1]
ENV_PATH = PROJECT_ROOT / ".env"
if ENV_PATH.exists():
    load_dotenv(ENV_PATH)


class AppSettings(BaseModel):
    """Dashboard level configuration."""

    name: str = "WebCraft AI"
    debug: bool = False
    # Base URL of the generation API; when empty the dashboard runs the pipeline in-process.
    api_url: Optional[str] = None


class ModelSettings(BaseModel):
    """Runtime configuration for the generative model backend."""

    provider: Literal["gemini", "mock"] = "gemini"
    gemini_api_key: Optional[str] = None
    gemini_model_name: str = "gemini-2.5-flash"
    temperature: float = Field(0.7, ge=0.0, le=2.0)
    top_p: float = Field(0.95, gt=0.0, le=1.0)
    max_new_tokens: int = Field(8192, ge=256, le=65536)


class StorageSettings(BaseModel):
    """Where the local history and session records live."""

    data_dir: Path = PROJECT_ROOT / "data"
    history_limit: int = Field(50, ge=1, le=500)

    @field_validator("data_dir", mode="before")
    @classmethod
    def _expand_data_dir(cls, value: Any) -> Path:
        """Ensure data_dir is always an absolute Path."""
        if isinstance(value, Path):
            return value
        return Path(value).expanduser().resolve()


class ServerSettings(BaseModel):
    """FastAPI / uvicorn binding."""

    host: str = "0.0.0.0"
    port: int = Field(8000, ge=1, le=65535)


class Settings(BaseModel):
    """Top-level settings container."""

    project_root: Path = PROJECT_ROOT
    app: AppSettings = AppSettings()
    model: ModelSettings = ModelSettings()
    storage: StorageSettings = StorageSettings()
    server: ServerSettings = ServerSettings()


def _settings_from_env() -> Dict[str, Any]:
    """Allow lightweight overriding via environment variables."""

    overrides: Dict[str, Dict[str, Any]] = {}

    env_map = {
        "WEBCRAFT_MODEL_PROVIDER": ("model", "provider"),
        "WEBCRAFT_GEMINI_MODEL": ("model", "gemini_model_name"),
        "WEBCRAFT_MODEL_TEMPERATURE": ("model", "temperature"),
        "WEBCRAFT_MODEL_MAX_TOKENS": ("model", "max_new_tokens"),
        "WEBCRAFT_STORAGE_DIR": ("storage", "data_dir"),
        "WEBCRAFT_HISTORY_LIMIT": ("storage", "history_limit"),
        "WEBCRAFT_API_URL": ("app", "api_url"),
        "HOST": ("server", "host"),
        "PORT": ("server", "port"),
    }

    for env_key, (section, field_name) in env_map.items():
        value = os.getenv(env_key)
        if value is None or value == "":
            continue
        if field_name in {"temperature"}:
            overrides.setdefault(section, {})[field_name] = float(value)
        elif field_name in {"max_new_tokens", "history_limit", "port"}:
            overrides.setdefault(section, {})[field_name] = int(value)
        else:
            overrides.setdefault(section, {})[field_name] = value

    # The plain name is what the hosting platforms set; the prefixed one wins if both exist.
    api_key = os.getenv("WEBCRAFT_GEMINI_API_KEY") or os.getenv("GEMINI_API_KEY")
    if api_key:
        overrides.setdefault("model", {})["gemini_api_key"] = api_key

    app_debug = os.getenv("WEBCRAFT_DEBUG")
    if app_debug is not None:
        overrides.setdefault("app", {})["debug"] = app_debug.lower() in {"1", "true", "yes"}

    return overrides


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings(**_settings_from_env())


settings = get_settings()
