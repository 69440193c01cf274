from __future__ import annotations

import json

import httpx
import pytest

from gamma_mcp.client import GammaClient
from gamma_mcp.exceptions import InvalidRequestError, UpstreamError
from gamma_mcp.settings import Settings


async def test_create_generation_posts_body_with_credential(gamma_api, gamma_client):
    payload = {"inputText": "Quarterly sales overview", "format": "presentation"}

    result = await gamma_client.create_generation(payload)

    assert result == {"generationId": "gen_123", "status": "pending"}
    (request,) = gamma_api.requests
    assert request.method == "POST"
    assert str(request.url) == "https://gamma.test/v0.2/generations"
    assert request.headers["X-API-KEY"] == "test-key"
    assert request.headers["content-type"] == "application/json"
    assert json.loads(request.content) == payload


async def test_get_generation_sends_credential_and_no_body(gamma_api, gamma_client):
    result = await gamma_client.get_generation("gen_123")

    assert result["status"] == "pending"
    (request,) = gamma_api.requests
    assert request.method == "GET"
    assert str(request.url) == "https://gamma.test/v0.2/generations/gen_123"
    assert request.headers["X-API-KEY"] == "test-key"
    assert request.content == b""


async def test_response_is_returned_unmodified(gamma_api, gamma_client):
    body = {"generationId": "gen_9", "status": "completed", "gammaUrl": "https://gamma.app/docs/x", "exportUrl": "https://e/x.pdf", "credits": {"deducted": 40}}
    gamma_api.status_script = [httpx.Response(200, json=body)]

    assert await gamma_client.get_generation("gen_9") == body


@pytest.mark.parametrize("api_key", [None, ""])
async def test_missing_credential_is_invalid_request_without_network(gamma_api, api_key):
    client = GammaClient(api_key, transport=httpx.MockTransport(gamma_api.handler))

    with pytest.raises(InvalidRequestError, match="GAMMA_API_KEY"):
        await client.create_generation({"inputText": "x"})
    with pytest.raises(InvalidRequestError):
        await client.get_generation("gen_123")

    assert gamma_api.requests == []


async def test_non_success_status_carries_code_and_raw_body(gamma_api, gamma_client):
    gamma_api.create_response = httpx.Response(400, text='{"message":"inputText too long"}')

    with pytest.raises(UpstreamError) as exc_info:
        await gamma_client.create_generation({"inputText": "x"})

    err = exc_info.value
    assert err.status_code == 400
    assert err.body == '{"message":"inputText too long"}'
    assert "Gamma API error (400)" in str(err)


async def test_unauthorized_error_gets_credential_tip(gamma_api, gamma_client):
    gamma_api.status_script = [httpx.Response(401, text="Unauthorized")]

    with pytest.raises(UpstreamError) as exc_info:
        await gamma_client.get_generation("gen_123")

    assert "Tip: Check that GAMMA_API_KEY" in exc_info.value.message


async def test_transport_error_propagates():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = GammaClient("k", transport=httpx.MockTransport(refuse))

    with pytest.raises(httpx.ConnectError):
        await client.get_generation("gen_123")


def test_from_settings_uses_configured_values():
    settings = Settings(gamma_api_key="abc", gamma_api_base="https://example.test/v1/", gamma_request_timeout=12.5)

    client = GammaClient.from_settings(settings)

    assert client.base_url == "https://example.test/v1"
    assert client.timeout == 12.5


@pytest.mark.parametrize("body", ['[{"status":"completed"}]', "null", "not json"])
async def test_non_object_status_body_is_upstream_error(gamma_api, gamma_client, body):
    gamma_api.status_script = [httpx.Response(200, text=body)]

    with pytest.raises(UpstreamError) as exc_info:
        await gamma_client.get_generation("gen_123")

    assert exc_info.value.status_code == 200
    assert exc_info.value.body == body


async def test_non_object_submission_body_is_upstream_error(gamma_api, gamma_client):
    gamma_api.create_response = httpx.Response(200, text='["gen_123"]')

    with pytest.raises(UpstreamError):
        await gamma_client.create_generation({"inputText": "x"})


async def test_rate_limit_body_mentioning_api_key_gets_no_tip(gamma_api, gamma_client):
    gamma_api.status_script = [httpx.Response(429, text="Too many requests for this API key")]

    with pytest.raises(UpstreamError) as exc_info:
        await gamma_client.get_generation("gen_123")

    assert exc_info.value.message == "Gamma API error (429): Too many requests for this API key"
