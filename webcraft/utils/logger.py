"""Centralized logger configuration.

Secrets registered with `register_secret` (the Gemini API key) are masked in
every record before it reaches a sink.
"""

from __future__ import annotations

import os
import sys
from typing import Optional, Set

from loguru import logger

_LOG_LEVEL = os.getenv("WEBCRAFT_LOG_LEVEL", "INFO").upper()
_SECRETS: Set[str] = set()
MASK = "***"


def register_secret(value: Optional[str]) -> None:
    if value:
        _SECRETS.add(value)


def mask_secrets(text: str) -> str:
    for secret in _SECRETS:
        text = text.replace(secret, MASK)
    return text


def _redact_record(record: dict) -> None:
    record["message"] = mask_secrets(record["message"])


def configure_logger(extra_sink: Optional[str] = None) -> None:
    """Configure loguru logger once per process."""

    logger.remove()
    logger.configure(patcher=_redact_record)
    logger.add(sys.stderr, level=_LOG_LEVEL, colorize=True, enqueue=True)

    if extra_sink:
        logger.add(extra_sink, level=_LOG_LEVEL, rotation="1 week", enqueue=True)


configure_logger(os.getenv("WEBCRAFT_LOG_FILE"))

__all__ = ["logger", "configure_logger", "register_secret", "mask_secrets", "MASK"]
