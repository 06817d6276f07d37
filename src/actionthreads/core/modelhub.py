"""ModelHub client helpers.

Centralizes construction of the external model provider client
(OpenAI-compatible) and exposes it to the rest of the code base as a
``Summarizer``: something that turns a prompt into raw reply text. Parsing
that text is the caller's job (see ``actionthreads.services.generation``).
"""

from __future__ import annotations

import logging
import time
from functools import lru_cache
from typing import Protocol

from openai import AsyncOpenAI

from .config import get_settings
from .errors import ActionPointGenerationError

logger = logging.getLogger("actionthreads.modelhub")


class ModelHubUnavailable(ActionPointGenerationError):
    """Raised when a model hub client cannot be constructed due to config."""

    default_message = "Action point generation is not configured"


class Summarizer(Protocol):
    async def complete(self, prompt: str) -> str: ...


@lru_cache
def get_modelhub_client() -> AsyncOpenAI | None:
    """Return a cached async OpenAI-compatible client if configuration present."""
    settings = get_settings()
    if not (settings.modelhub_api_key and settings.modelhub_base_url):
        return None
    return AsyncOpenAI(
        api_key=settings.modelhub_api_key.get_secret_value(),
        base_url=settings.modelhub_base_url,
        timeout=settings.modelhub_timeout_seconds,
        max_retries=settings.modelhub_max_retries,
    )


def ensure_openai_client() -> AsyncOpenAI:
    """Strict getter that raises if the client is unavailable."""
    client = get_modelhub_client()
    if client is None:
        raise ModelHubUnavailable()
    return client


class ModelHubSummarizer:
    """``Summarizer`` backed by chat completions of the configured model."""

    def __init__(self, model: str | None = None, temperature: float = 0.2):
        self.model = model or get_settings().action_point_model
        self.temperature = temperature

    async def complete(self, prompt: str) -> str:
        client = ensure_openai_client()
        started = time.perf_counter()
        completion = await client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.temperature,
        )
        logger.info(
            "modelhub.completion",
            extra={
                "model": self.model,
                "prompt_chars": len(prompt),
                "elapsed_ms": round((time.perf_counter() - started) * 1000, 1),
            },
        )
        return completion.choices[0].message.content or ""


def get_summarizer() -> Summarizer:
    return ModelHubSummarizer()
