"""Error taxonomy for chat answering."""

from __future__ import annotations


class AssistantError(Exception):
    """Base class for failures surfaced to chat callers."""


class InvalidInput(AssistantError):
    """Raised when the chat message is missing or is not a string."""


class UpstreamFailure(AssistantError):
    """Raised when the generation provider fails or times out. Never retried."""


__all__ = ["AssistantError", "InvalidInput", "UpstreamFailure"]
