"""Project constants for the Gamma API adapter.

Values here mirror the public Gamma generation API. Keep them in one place so
the client, the poller and the tool layer agree on endpoints and timings.
"""

from __future__ import annotations

from typing import Final

from .enums import CardSplit, OutputFormat, TextMode

# ------------------------------- Remote API --------------------------------- #

DEFAULT_API_BASE: Final[str] = "https://public-api.gamma.app/v0.2"

# Header carrying the credential on every request.
API_KEY_HEADER: Final[str] = "X-API-KEY"

GENERATIONS_PATH: Final[str] = "/generations"

# Per-request HTTP timeout in seconds.
DEFAULT_REQUEST_TIMEOUT: Final[float] = 60.0

API_KEY_ENV_VAR: Final[str] = "GAMMA_API_KEY"

# ------------------------------- Polling ------------------------------------ #

# Gamma's documented recommended status poll cadence.
POLL_INTERVAL_SECONDS: Final[float] = 5.0

DEFAULT_MAX_WAIT_SECONDS: Final[float] = 300.0

# ------------------------------- Tool defaults ------------------------------ #

DEFAULT_TEXT_MODE: Final[TextMode] = TextMode.GENERATE
DEFAULT_FORMAT: Final[OutputFormat] = OutputFormat.PRESENTATION
DEFAULT_NUM_CARDS: Final[int] = 10
DEFAULT_CARD_SPLIT: Final[CardSplit] = CardSplit.AUTO
DEFAULT_LANGUAGE: Final[str] = "en"
DEFAULT_IMAGE_SOURCE: Final[str] = "aiGenerated"

# ------------------------------- Server ------------------------------------- #

SERVER_NAME: Final[str] = "gamma-mcp"
