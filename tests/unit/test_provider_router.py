from __future__ import annotations

import httpx
import pytest

from multiai.core.config.loader import resolve_provider_settings
from multiai.core.config.schema import AppConfig
from multiai.core.providers.base import ProviderAdapter
from multiai.core.providers.identity import OPENAI_COMPATIBLE, ProviderIdentity
from multiai.core.providers.openai_compatible import OpenAICompatibleAdapter
from multiai.core.providers.router import ADAPTER_TYPES, ProviderRouter
from multiai.core.relay.schemas import ChatRequest
from multiai.core.runtime.errors import ConfigurationError, ProviderError, UnsupportedProviderError


def _request() -> ChatRequest:
    return ChatRequest(messages=[{"role": "user", "content": "hi"}])


def _router(env: dict[str, str], handler) -> ProviderRouter:
    return ProviderRouter(resolve_provider_settings(AppConfig(), env), transport=httpx.MockTransport(handler))


def test_every_provider_has_an_adapter():
    assert set(ADAPTER_TYPES) == set(ProviderIdentity)
    for identity in OPENAI_COMPATIBLE:
        assert ADAPTER_TYPES[identity] is OpenAICompatibleAdapter
    assert all(issubclass(t, ProviderAdapter) for t in ADAPTER_TYPES.values())


def test_configured_tracks_present_keys():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no network expected")

    router = _router({"GROQ_API_KEY": "g", "OPENAI_API_KEY": "o"}, handler)
    assert router.configured() == ["openai", "groq"]

    router = _router({"GROQ_API_KEY": "g"}, handler)
    assert router.configured() == ["groq"]


@pytest.mark.asyncio
async def test_unknown_service_is_rejected():
    router = _router({}, lambda request: httpx.Response(500))
    with pytest.raises(UnsupportedProviderError, match="Unsupported AI service: unknown"):
        await router.dispatch("unknown", _request())


@pytest.mark.asyncio
async def test_missing_key_fails_before_any_network_call():
    calls = {"n": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["n"] += 1
        return httpx.Response(200, json={})

    router = _router({}, handler)
    with pytest.raises(ConfigurationError, match="API key for mistral is not configured"):
        await router.dispatch("mistral", _request())
    assert calls["n"] == 0


@pytest.mark.asyncio
async def test_http_error_is_wrapped_without_leaking_the_url(capsys):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": {"message": "API key not valid"}})

    router = _router({"GOOGLE_API_KEY": "secret-google-key"}, handler)
    with pytest.raises(ProviderError) as excinfo:
        await router.dispatch("google", _request())

    err = excinfo.value
    assert str(err) == "Failed to call google: Request failed with status code 401"
    assert err.provider == "google"
    assert err.service == "google"
    assert "secret-google-key" not in str(err)
    assert isinstance(err.__cause__, httpx.HTTPStatusError)

    out = capsys.readouterr().out
    assert "provider_call_failed" in out
    assert "API key not valid" in out
    assert "secret-google-key" not in out


@pytest.mark.asyncio
async def test_transport_failure_is_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    router = _router({"OPENAI_API_KEY": "o"}, handler)
    with pytest.raises(ProviderError, match="Failed to call openai: connection refused"):
        await router.dispatch("openai", _request())


@pytest.mark.asyncio
async def test_malformed_provider_body_is_wrapped():
    router = _router({"ANTHROPIC_API_KEY": "a"}, lambda request: httpx.Response(200, json={"id": "m", "content": []}))
    with pytest.raises(ProviderError, match="Failed to call anthropic"):
        await router.dispatch("anthropic", _request())


@pytest.mark.asyncio
async def test_successful_dispatch_returns_canonical_response():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"id": "msg", "model": "claude", "content": [{"type": "text", "text": "yo"}], "stop_reason": "end_turn"},
        )

    router = _router({"ANTHROPIC_API_KEY": "a"}, handler)
    result = await router.dispatch("anthropic", _request())
    assert result["choices"][0]["message"]["content"] == "yo"
