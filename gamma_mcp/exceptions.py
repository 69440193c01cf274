"""Error types raised by the Gamma client and the status poller.

All failures share one base, :class:`GammaError`, tagged with an
:class:`~gamma_mcp.shard.enums.ErrorKind`. Each subclass carries the payload
specific to its kind, so callers branch on ``kind`` (or the class) instead of
parsing messages.
"""

from __future__ import annotations

from typing import Any

from .schema import Error
from .shard.constants import API_KEY_ENV_VAR
from .shard.enums import ErrorKind
from .utils.error_helpers import augment_with_credential_tip


class GammaError(Exception):
    """Base class for every error surfaced to MCP clients."""

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    @property
    def user_message(self) -> str:
        return f"[{self.kind.value}] {self.message}"

    def to_error(self) -> Error:
        return Error(code=self.kind.value, message=self.message, details=self.details or None)


class InvalidRequestError(GammaError):
    """Raised before any network access when the request cannot be sent."""

    kind = ErrorKind.INVALID_REQUEST


class MissingCredentialError(InvalidRequestError):
    def __init__(self) -> None:
        super().__init__(f"{API_KEY_ENV_VAR} environment variable is not set")


class UpstreamError(GammaError):
    """Raised for any non-success HTTP response from Gamma.

    The status code and body are kept verbatim; their meaning is not
    interpreted here.
    """

    kind = ErrorKind.INTERNAL_ERROR

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        message = augment_with_credential_tip(f"Gamma API error ({status_code}): {body}", status_code)
        super().__init__(message, details={"status_code": status_code, "body": body})


class PollTimeoutError(GammaError):
    """Raised when polling hits its deadline without a terminal status."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, elapsed_seconds: float, last_status: str | None, max_wait_seconds: float) -> None:
        self.elapsed_seconds = elapsed_seconds
        self.last_status = last_status
        self.max_wait_seconds = max_wait_seconds
        super().__init__(
            f"Generation polling timed out after {elapsed_seconds:.1f} seconds "
            f"(maxWaitSeconds={max_wait_seconds:g}). Current status: {last_status}",
            details={
                "elapsed_seconds": elapsed_seconds,
                "last_status": last_status,
                "max_wait_seconds": max_wait_seconds,
            },
        )


__all__ = [
    "GammaError",
    "InvalidRequestError",
    "MissingCredentialError",
    "UpstreamError",
    "PollTimeoutError",
]
