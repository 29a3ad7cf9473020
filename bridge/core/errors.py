from __future__ import annotations

from typing import Optional


REDACTED = "***"


def redact(text: str, secret: Optional[str]) -> str:
    """Replace every occurrence of ``secret`` in ``text`` with ``***``."""
    if not secret:
        return text
    return text.replace(secret, REDACTED)


class BridgeError(Exception):
    """Base class for failures of a single bridge request.

    ``error`` is the fixed, caller-facing text of the failure envelope;
    ``details`` optionally carries the underlying message.
    """

    error: str = "Error processing your request"

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.details = details

    def envelope(self) -> dict:
        body = {"error": self.error}
        if self.details:
            body["details"] = self.details
        return body


class ConfigurationError(BridgeError):
    """The deployment is missing its model-service credential."""

    error = "API key not configured"


class MalformedRequestError(BridgeError):
    """The request body does not match the turns schema."""

    error = "Invalid request payload"


class UpstreamError(BridgeError):
    """The external text-generation call failed."""
