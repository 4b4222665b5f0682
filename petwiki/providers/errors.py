"""Errors raised by breed data providers and media generation."""

from __future__ import annotations

FETCH_FAILED_MESSAGE = (
    "Failed to fetch breeds. Please check your API key or connection."
)


class FetchError(RuntimeError):
    """Base class for every upstream failure surfaced to the UI."""

    @property
    def user_message(self) -> str:
        return FETCH_FAILED_MESSAGE


class ConfigurationError(FetchError):
    """A required credential or setting is missing. Never retried."""

    @property
    def user_message(self) -> str:
        return str(self)


class UpstreamRejected(FetchError):
    """Non-2xx status, transport failure, or a ``success: false`` envelope."""


class MalformedResponse(FetchError):
    """Upstream answered but the payload could not be parsed or validated."""


class GenerationCancelled(FetchError):
    """A long-running generation was cancelled by its caller."""


class GenerationTimeout(FetchError):
    """A long-running generation did not finish within its wait bound."""
