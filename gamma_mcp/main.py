import argparse
import json
import sys
from typing import Annotated, Any, NoReturn

from fastmcp import Context, FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools.tool import ToolResult
from loguru import logger
from mcp.types import TextContent
from pydantic import Field, ValidationError

from .client import GammaClient
from .exceptions import GammaError
from .polling import GenerationPoller
from .schema import (
    CardOptions,
    GenerateGammaRequest,
    ImageOptions,
    PollOptions,
    SharingOptions,
    TextOptions,
)
from .settings import get_settings
from .shard import constants as C
from .shard.enums import CardSplit, ErrorKind, ExportFormat, OutputFormat, TextMode
from .shard.instructions import SERVER_INSTRUCTIONS, TOOL_DESCRIPTIONS

app = FastMCP(C.SERVER_NAME, instructions=SERVER_INSTRUCTIONS)


def configure_logging(level: str = "INFO") -> None:
    """Send loguru output to stderr only; stdout carries the MCP stdio stream."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def _make_client() -> GammaClient:
    # Settings are resolved on first tool call, so a missing key never blocks startup.
    return GammaClient.from_settings(get_settings())


def _make_poller(client: GammaClient) -> GenerationPoller:
    return GenerationPoller(client.get_generation, interval_seconds=get_settings().gamma_poll_interval_seconds)


def _json_result(payload: dict[str, Any]) -> ToolResult:
    text = json.dumps(payload, indent=2)
    return ToolResult(content=[TextContent(type="text", text=text)], structured_content=payload)


def _handle_gamma_error(e: Exception, action: str) -> NoReturn:
    """Convert an exception to a ToolError for proper MCP error handling.

    FastMCP turns ToolError into an MCP error result (isError=True), so every
    failure reaches the client as a structured error, never as output.
    """
    if isinstance(e, GammaError):
        raise ToolError(e.user_message) from e
    if isinstance(e, ValidationError):
        raise ToolError(f"[{ErrorKind.INVALID_REQUEST.value}] {e}") from e

    # Transport-level failures (DNS, refused connection, timeouts) and anything unexpected
    logger.error(f"Unexpected error while trying to {action}: {type(e).__name__}: {e}")
    raise ToolError(f"[{ErrorKind.INTERNAL_ERROR.value}] Failed to {action}: {e}") from e


@app.tool(
    name="generate_gamma",
    description=TOOL_DESCRIPTIONS["generate_gamma"],
    annotations={
        "title": "Generate Gamma",
        "readOnlyHint": False,
        "idempotentHint": False,
        "openWorldHint": True,
    },
)
async def mcp_generate_gamma(
    inputText: Annotated[  # noqa: N803 - argument names mirror the Gamma API
        str,
        Field(
            min_length=1,
            description=(
                "The text content to generate from (1-100,000 tokens / ~1-400,000 characters). "
                "Can be a short prompt, messy notes, or polished content."
            ),
        ),
    ],
    textMode: Annotated[  # noqa: N803
        TextMode | None,
        Field(
            json_schema_extra={"default": C.DEFAULT_TEXT_MODE.value},
            description=(
                "How to process the input text. 'generate' creates new content from a prompt, "
                "'condense' summarizes the input, 'preserve' keeps the input text mostly as-is."
            )
        ),
    ] = None,
    format: Annotated[
        OutputFormat | None,
        Field(json_schema_extra={"default": C.DEFAULT_FORMAT.value}, description="The output format type."),
    ] = None,
    themeName: Annotated[  # noqa: N803
        str | None,
        Field(
            description=(
                "Name of a specific theme to use. ONLY use if the user explicitly requests a custom theme by name. "
                "Theme must exist in your Gamma workspace. Omit to use Gamma's default theme selection."
            )
        ),
    ] = None,
    numCards: Annotated[  # noqa: N803
        int | None,
        Field(json_schema_extra={"default": C.DEFAULT_NUM_CARDS}, description="Number of cards/slides to generate (1-60 for Pro, 1-75 for Ultra)."),
    ] = None,
    cardSplit: Annotated[  # noqa: N803
        CardSplit | None,
        Field(json_schema_extra={"default": C.DEFAULT_CARD_SPLIT.value}, description="How to split content into cards. 'auto' lets AI decide, 'inputTextBreaks' uses line breaks in input."),
    ] = None,
    additionalInstructions: Annotated[  # noqa: N803
        str | None,
        Field(description="Additional instructions to guide content and layout (1-500 characters)."),
    ] = None,
    exportAs: Annotated[  # noqa: N803
        ExportFormat | None,
        Field(description="Export the generated content as PDF or PPTX."),
    ] = None,
    textOptions: Annotated[TextOptions | None, Field(description="Options for text generation.")] = None,  # noqa: N803
    imageOptions: Annotated[ImageOptions | None, Field(description="Options for image generation/sourcing.")] = None,  # noqa: N803
    cardOptions: Annotated[CardOptions | None, Field(description="Card layout options.")] = None,  # noqa: N803
    sharingOptions: Annotated[SharingOptions | None, Field(description="Sharing and access options.")] = None,  # noqa: N803
    ctx: Context | None = None,
) -> ToolResult:
    """Submit a generation and return Gamma's response verbatim."""
    try:
        req = GenerateGammaRequest(
            inputText=inputText,
            textMode=textMode,
            format=format,
            themeName=themeName,
            numCards=numCards,
            cardSplit=cardSplit,
            additionalInstructions=additionalInstructions,
            exportAs=exportAs,
            textOptions=textOptions,
            imageOptions=imageOptions,
            cardOptions=cardOptions,
            sharingOptions=sharingOptions,
        )
        client = _make_client()
        logger.info(f"Submitting Gamma generation (format={req.format}, numCards={req.numCards})")
        result = await client.create_generation(req.to_payload())
        logger.info(f"Gamma accepted generation {result.get('generationId')}")
        return _json_result(result)
    except Exception as e:
        _handle_gamma_error(e, "generate gamma")


@app.tool(
    name="get_gamma_generation",
    description=TOOL_DESCRIPTIONS["get_gamma_generation"],
    annotations={
        "title": "Get Gamma Generation",
        "readOnlyHint": True,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def mcp_get_gamma_generation(
    generationId: Annotated[  # noqa: N803
        str,
        Field(
            description=(
                "The generation ID returned from the generate_gamma tool. "
                "Used to check the status and retrieve URLs for the generated content."
            )
        ),
    ],
    pollUntilComplete: Annotated[  # noqa: N803
        bool,
        Field(
            description=(
                "Whether to automatically poll every 5 seconds until the generation is complete. "
                "Recommended: true (default). Set to false to only check status once."
            )
        ),
    ] = True,
    maxWaitSeconds: Annotated[  # noqa: N803
        float,
        Field(
            description=(
                "Maximum time in seconds to wait for generation to complete when polling. "
                "Default: 300 (5 minutes). Only used when pollUntilComplete is true."
            ),
        ),
    ] = C.DEFAULT_MAX_WAIT_SECONDS,
    ctx: Context | None = None,
) -> ToolResult:
    """Check a generation once, or poll until it is completed or failed."""
    try:
        opts = PollOptions(generationId=generationId, pollUntilComplete=pollUntilComplete, maxWaitSeconds=maxWaitSeconds)
        poller = _make_poller(_make_client())
        result = await poller.run(opts.generationId, opts.pollUntilComplete, opts.maxWaitSeconds)
        return _json_result(result)
    except Exception as e:
        _handle_gamma_error(e, "get generation status")


def main() -> None:
    parser = argparse.ArgumentParser(description="Gamma MCP Server")
    # Only accept transports supported by FastMCP for server runs. SSE is
    # legacy but still supported for backward compatibility.
    parser.add_argument(
        "--transport",
        choices=["stdio", "http", "sse", "streamable-http"],
        default="stdio",
        help="Transport to use (stdio, sse, http, streamable-http). Default: stdio",
    )
    parser.add_argument("--host", help="Host to bind to")
    parser.add_argument("--port", type=int, help="Port to listen on")
    args = parser.parse_args()

    configure_logging(get_settings().log_level)

    transport = args.transport
    logger.info(f"Starting Gamma MCP server with {transport} transport")

    # FastMCP's stdio transport does not accept `host`/`port` kwargs.
    http_transports = {"http", "sse", "streamable-http"}
    try:
        if transport in http_transports:
            app.run(transport=transport, host=args.host, port=args.port)
        else:
            app.run()
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
