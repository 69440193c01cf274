from __future__ import annotations

# Tool descriptions used by FastMCP when registering tools. Keep short and clear.
TOOL_DESCRIPTIONS: dict[str, str] = {
    "generate_gamma": (
        "Generate a Gamma presentation, document, or social media post using AI. "
        "Requires GAMMA_API_KEY to be set. inputText is required and should contain the content you want "
        "in your cards. Returns a generationId to pass to get_gamma_generation."
    ),
    "get_gamma_generation": (
        "Retrieve the status and URLs of a Gamma generation. By default polls every 5 seconds until the "
        "generation is completed or failed. Returns the Gamma URL plus PDF/PPTX export URLs if requested. "
        "Set pollUntilComplete=false for a single status check."
    ),
}


# High-level, concise server instructions for agents.
SERVER_INSTRUCTIONS: str = (
    "Gamma MCP Server - Agent Instructions.\n"
    "Role: This server exposes two tools, generate_gamma and get_gamma_generation, backed by the Gamma "
    "generation API.\n\n"
    "Workflow (short):\n"
    "1) Call generate_gamma with inputText and any options; keep the returned generationId.\n"
    "2) Call get_gamma_generation with that generationId. By default it waits (up to maxWaitSeconds, "
    "default 300) until the status is 'completed' or 'failed'.\n\n"
    "Hard rules (must follow):\n"
    "- Only set themeName when the user explicitly asks for a named theme.\n"
    "- Do not call generate_gamma again just because a generation is still pending; poll instead.\n\n"
    "Outputs and failures (summary):\n"
    "- Successful calls return the raw Gamma JSON as text and as structured content.\n"
    "- Failures surface as MCP ToolErrors whose message starts with a stable kind: "
    "[invalid_request] (missing API key), [internal_error] (Gamma HTTP error, with status code and body), "
    "or [timeout] (polling exceeded maxWaitSeconds; the generation may still finish, poll again)."
)


__all__ = ["TOOL_DESCRIPTIONS", "SERVER_INSTRUCTIONS"]
