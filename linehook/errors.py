"""
Error taxonomy for the webhook pipeline and the outbound client.

Authentication and payload errors are mapped to HTTP 400 by the webhook
router; they never reach event handlers.
"""

from __future__ import annotations


class LineBotError(Exception):
    """Base class for all linehook errors."""


class AuthError(LineBotError):
    """The request signature did not match the channel secret."""


class MalformedPayloadError(LineBotError):
    """The request body is not JSON, not an object, or has no events array."""


class DecodeError(MalformedPayloadError, ValueError):
    """A known variant is missing required fields or has invalid ones."""


class ReplyUnavailableError(LineBotError):
    """The event was decoded without a reply capability."""


class RemoteCallError(LineBotError):
    """The LINE API answered an outbound call with a non-200 status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
