"""Error taxonomy shared by the Reno services and API layer.

Every error carries a stable ``kind`` string so callers (and the HTTP layer)
can tell "check your API key" failures apart from "try again" failures.
"""

from __future__ import annotations


class RenoError(Exception):
    """Base class for all errors raised by the Reno backend."""

    kind: str = "error"

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(RenoError):
    """Caller-side input problem; no generation request may be issued."""

    kind = "validation"


class ServiceError(RenoError):
    """Network, auth or quota failure while reaching the Gemini service."""

    kind = "service"

    def __init__(
        self,
        message: str,
        detail: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, detail)
        self.status_code = status_code


class GenerationError(RenoError):
    """The plan service answered, but the answer is not a usable plan."""

    kind = "generation"


class EmptyResponseError(GenerationError):
    kind = "empty_response"


class MalformedPayloadError(GenerationError):
    kind = "malformed_payload"


class AssetGenerationError(RenoError):
    """The image service answered without a usable image."""

    kind = "asset_generation"


class NoImageProducedError(AssetGenerationError):
    kind = "no_image_produced"


class CredentialError(RenoError):
    """No API credential is selected and none could be obtained."""

    kind = "credential"


class SessionNotFoundError(RenoError):
    kind = "session_not_found"


class StaleResultError(RenoError):
    """A result landed after its session was reset or its request superseded."""

    kind = "stale_result"
