from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .shard import constants as C
from .shard.enums import CardSplit, ExportFormat, OutputFormat, TextAmount, TextMode

# ------------------------------ Error handling ------------------------------ #


class Error(BaseModel):
    """Normalized error provided on failures.

    ``code`` carries the error kind so clients can branch without parsing the
    message.
    """

    code: str = Field(description="Stable machine-readable error kind, e.g. 'timeout'.")
    message: str = Field(description="Human-readable error message.")
    details: dict[str, Any] | None = Field(
        default=None,
        description="Kind-specific details (HTTP status and body, elapsed time and last status).",
    )


# ------------------------------ Option groups ------------------------------- #

# Option groups are forwarded to Gamma as-is; unknown keys are kept so newer API
# options pass through without a release here.


class TextOptions(BaseModel):
    """Options for text generation."""

    model_config = ConfigDict(extra="allow")

    amount: TextAmount | None = Field(default=None, json_schema_extra={"default": TextAmount.MEDIUM.value}, description="Amount of text to generate per card.")
    tone: str | None = Field(default=None, description="The tone of voice for the content.")
    audience: str | None = Field(default=None, description="The intended audience for the content.")
    language: str | None = Field(default=None, json_schema_extra={"default": C.DEFAULT_LANGUAGE}, description="Output language code (e.g., 'en', 'es', 'fr').")


class ImageOptions(BaseModel):
    """Options for image generation/sourcing."""

    model_config = ConfigDict(extra="allow", protected_namespaces=())

    source: str | None = Field(default=None, json_schema_extra={"default": C.DEFAULT_IMAGE_SOURCE}, description="Image source (e.g., 'aiGenerated', 'unsplash').")
    model: str | None = Field(default=None, description="AI model to use for image generation.")
    style: str | None = Field(default=None, description="Artistic style for generated images.")


class CardOptions(BaseModel):
    """Card layout options."""

    model_config = ConfigDict(extra="allow")

    dimensions: str | None = Field(default=None, description="Card dimensions (e.g., 'fluid', '16x9', '4x3').")


class SharingOptions(BaseModel):
    """Sharing and access options."""

    model_config = ConfigDict(extra="allow")

    workspaceAccess: str | None = Field(default=None, description="Workspace access level for the generated content.")


# ------------------------------- Generate API -------------------------------- #


class GenerateGammaRequest(BaseModel):
    """Body of ``POST /generations``.

    Field names match the Gamma API so the model dumps straight into the
    request body. Only ``inputText`` is checked locally; Gamma enforces the rest.
    """

    inputText: str = Field(min_length=1)
    textMode: TextMode | None = Field(default=None, json_schema_extra={"default": C.DEFAULT_TEXT_MODE.value})
    format: OutputFormat | None = Field(default=None, json_schema_extra={"default": C.DEFAULT_FORMAT.value})
    themeName: str | None = Field(default=None)
    numCards: int | None = Field(default=None, json_schema_extra={"default": C.DEFAULT_NUM_CARDS})
    cardSplit: CardSplit | None = Field(default=None, json_schema_extra={"default": C.DEFAULT_CARD_SPLIT.value})
    additionalInstructions: str | None = Field(default=None)
    exportAs: ExportFormat | None = Field(default=None)
    textOptions: TextOptions | None = Field(default=None)
    imageOptions: ImageOptions | None = Field(default=None)
    cardOptions: CardOptions | None = Field(default=None)
    sharingOptions: SharingOptions | None = Field(default=None)

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body for Gamma, omitting fields left unset (None)."""
        return self.model_dump(mode="json", exclude_none=True)


# -------------------------------- Status API --------------------------------- #


class PollOptions(BaseModel):
    """Per-call polling configuration for ``get_gamma_generation``."""

    generationId: str
    pollUntilComplete: bool = Field(default=True)
    maxWaitSeconds: float = Field(default=C.DEFAULT_MAX_WAIT_SECONDS)


def tool_input_schemas() -> Mapping[str, dict[str, Any]]:
    """Return JSON Schemas for tool input payloads keyed by tool name."""

    return {
        "generate_gamma": GenerateGammaRequest.model_json_schema(),
        "get_gamma_generation": PollOptions.model_json_schema(),
    }


__all__ = [
    "Error",
    "TextOptions",
    "ImageOptions",
    "CardOptions",
    "SharingOptions",
    "GenerateGammaRequest",
    "PollOptions",
    "tool_input_schemas",
]
