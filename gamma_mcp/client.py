from __future__ import annotations

from typing import Any

import httpx
from loguru import logger

from .exceptions import MissingCredentialError, UpstreamError
from .settings import Settings
from .shard import constants as C


class GammaClient:
    """Thin async client for the Gamma generation endpoints.

    The credential is fixed at construction and never mutated. Each call opens
    its own ``httpx.AsyncClient``, so concurrent calls share no connection
    state. Transport errors (DNS, refused connection, timeouts) propagate as
    raised by httpx.
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        base_url: str = C.DEFAULT_API_BASE,
        timeout: float = C.DEFAULT_REQUEST_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> GammaClient:
        return cls(
            settings.gamma_api_key,
            base_url=settings.gamma_api_base,
            timeout=settings.gamma_request_timeout,
        )

    def _headers(self) -> dict[str, str]:
        if not self._api_key:
            raise MissingCredentialError()
        return {C.API_KEY_HEADER: self._api_key}

    def _http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self._transport)

    @staticmethod
    def _json_object(response: httpx.Response) -> dict[str, Any]:
        # Gamma answers with a JSON object; anything else is an unusable upstream reply
        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            logger.error(f"Gamma API returned a non-object body for {response.request.method} {response.request.url.path}")
            raise UpstreamError(response.status_code, response.text)
        return data

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_success:
            return
        logger.error(f"Gamma API returned {response.status_code} for {response.request.method} {response.request.url.path}")
        raise UpstreamError(response.status_code, response.text)

    async def create_generation(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Submit a generation; return Gamma's response (``generationId`` etc.) unmodified."""
        headers = self._headers()
        async with self._http() as http:
            response = await http.post(C.GENERATIONS_PATH, json=payload, headers=headers)
        self._raise_for_status(response)
        return self._json_object(response)

    async def get_generation(self, generation_id: str) -> dict[str, Any]:
        """Fetch the current status payload of a generation."""
        headers = self._headers()
        async with self._http() as http:
            response = await http.get(f"{C.GENERATIONS_PATH}/{generation_id}", headers=headers)
        self._raise_for_status(response)
        return self._json_object(response)


__all__ = ["GammaClient"]
