from __future__ import annotations

from enum import StrEnum
from typing import Self


class TextMode(StrEnum):
    """How Gamma treats ``inputText``.

    - ``GENERATE``: expand a short prompt into new content
    - ``CONDENSE``: summarize long input
    - ``PRESERVE``: keep the input text mostly as-is
    """

    GENERATE = "generate"
    CONDENSE = "condense"
    PRESERVE = "preserve"


class OutputFormat(StrEnum):
    """Kind of artifact Gamma produces."""

    PRESENTATION = "presentation"
    DOCUMENT = "document"
    SOCIAL = "social"


class CardSplit(StrEnum):
    """Card split strategy: let the AI decide or honor line breaks in the input."""

    AUTO = "auto"
    INPUT_TEXT_BREAKS = "inputTextBreaks"


class ExportFormat(StrEnum):
    PDF = "pdf"
    PPTX = "pptx"


class TextAmount(StrEnum):
    """Amount of text generated per card."""

    BRIEF = "brief"
    MEDIUM = "medium"
    DETAILED = "detailed"
    EXTENSIVE = "extensive"


class GenerationStatus(StrEnum):
    """Terminal generation statuses reported by Gamma.

    Only the terminal labels are enumerated. Any other value the service
    reports (``pending``, ``running``, or labels added later) means the job is
    still in progress.
    """

    COMPLETED = "completed"
    FAILED = "failed"

    @classmethod
    def from_str(cls, value: str | None) -> Self | None:
        if not value:
            return None
        try:
            return cls(value)  # type: ignore[arg-type]
        except ValueError:
            return None

    @classmethod
    def is_terminal(cls, value: str | None) -> bool:
        return cls.from_str(value) is not None


class ErrorKind(StrEnum):
    """Stable error discriminators surfaced to MCP clients."""

    INVALID_REQUEST = "invalid_request"
    INTERNAL_ERROR = "internal_error"
    TIMEOUT = "timeout"


__all__ = ["TextMode", "OutputFormat", "CardSplit", "ExportFormat", "TextAmount", "GenerationStatus", "ErrorKind"]
