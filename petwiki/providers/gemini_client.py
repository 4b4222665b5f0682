"""Gemini client construction."""

from __future__ import annotations

import logging

from google import genai

from petwiki.providers.errors import ConfigurationError

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "GEMINI_API_KEY is not configured"


def create_genai_client(api_key: str) -> genai.Client:
    """Create a Gemini client for *api_key*.

    Args:
        api_key: Gemini API key.

    Returns:
        Configured ``genai.Client``.

    Raises:
        ConfigurationError: If no key is configured.
    """
    if not api_key:
        raise ConfigurationError(MISSING_KEY_MESSAGE)
    return genai.Client(api_key=api_key)


class LazyGenaiClient:
    """Builds the Gemini client on first use.

    The application starts without a key; only the operations that need the
    generative API fail, each with a ConfigurationError.
    """

    def __init__(self, api_key: str, client: genai.Client | None = None) -> None:
        self.api_key = api_key
        self._client = client

    @property
    def configured(self) -> bool:
        return self._client is not None or bool(self.api_key)

    def get(self) -> genai.Client:
        if self._client is None:
            self._client = create_genai_client(self.api_key)
            logger.info("Gemini client initialized")
        return self._client
