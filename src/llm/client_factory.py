# src/llm/client_factory.py — v1
"""Factory: instantiate the remote inference client from settings."""

from __future__ import annotations

import logging

from facetier.config.settings import Settings
from facetier.llm.base_client import BaseInferenceClient

logger = logging.getLogger(__name__)


def create_inference_client(settings: Settings | None = None) -> BaseInferenceClient:
    """Build the OpenAI-compatible inference client.

    The API key is read once here; an empty key is allowed and simply makes
    every remote call fail over to the local tiers.
    """
    from facetier.llm.adapters.openai_adapter import OpenAIInferenceClient

    settings = settings or Settings()
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set; remote analysis will fail over")
    logger.debug(
        "Creating inference client: model=%s, base_url=%s",
        settings.remote_model, settings.remote_base_url,
    )
    return OpenAIInferenceClient(
        model=settings.remote_model,
        api_key=settings.openai_api_key,
        base_url=settings.remote_base_url,
        max_tokens=settings.remote_max_tokens,
        timeout_s=settings.remote_timeout_s,
    )
