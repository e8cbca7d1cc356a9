"""HTTP client for the generation API, used when the dashboard runs apart from the server."""

from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from webcraft.core.errors import (
    API_KEY_MISSING_MESSAGE,
    ConfigurationError,
    ProviderError,
    ValidationError,
)
from webcraft.core.models import GenerationResult
from webcraft.utils.logger import logger
from webcraft.utils.title import DEFAULT_TITLE
from webcraft.utils.validators import require_prompt

GENERATE_ENDPOINT = "api/generate-website"


class RemoteGenerator:
    """Calls POST /api/generate-website and assembles the result locally."""

    def __init__(self, api_url: str, timeout: float = 120.0, session: Optional[requests.Session] = None):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _post(self, payload: Dict[str, Any]) -> requests.Response:
        url = f"{self.api_url}/{GENERATE_ENDPOINT}"
        try:
            return self.session.post(url, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            logger.error("Generation API request failed: {}", exc)
            raise ProviderError(f"Generation API unreachable: {exc}") from exc

    def run(self, raw_prompt: str, fallback_title: Optional[str] = None) -> GenerationResult:
        # Checked here too so a blank prompt never leaves the machine.
        require_prompt(raw_prompt)
        response = self._post({"prompt": raw_prompt.strip()})

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if not response.ok:
            message = data.get("error") or f"Generation API returned {response.status_code}"
            if response.status_code == 400:
                raise ValidationError(message)
            if message == API_KEY_MISSING_MESSAGE:
                raise ConfigurationError(message)
            raise ProviderError(message)

        code = data.get("code")
        if not isinstance(code, str):
            raise ProviderError("Generation API returned no code")

        title = data.get("title")
        if title is not None and not isinstance(title, str):
            raise ProviderError("Generation API returned a malformed title")
        title = title or fallback_title or DEFAULT_TITLE
        return GenerationResult.create(prompt=raw_prompt, title=title, code=code)


__all__ = ["RemoteGenerator", "GENERATE_ENDPOINT"]
