from __future__ import annotations

from time import perf_counter
from typing import Any

import httpx

from multiai.core.config.loader import ProviderTable
from multiai.core.providers.anthropic_adapter import AnthropicAdapter
from multiai.core.providers.base import ProviderAdapter
from multiai.core.providers.google_adapter import GoogleAdapter
from multiai.core.providers.identity import ProviderIdentity
from multiai.core.providers.openai_compatible import OpenAICompatibleAdapter
from multiai.core.relay.schemas import ChatRequest
from multiai.core.runtime.errors import (
    ConfigurationError,
    ProviderError,
    UnsupportedProviderError,
    describe_failure,
    failure_diagnostics,
)
from multiai.core.telemetry.logging import get_logger
from multiai.core.telemetry.tracing import TraceContext, trace_event

ADAPTER_TYPES: dict[ProviderIdentity, type[ProviderAdapter]] = {
    ProviderIdentity.OPENAI: OpenAICompatibleAdapter,
    ProviderIdentity.ANTHROPIC: AnthropicAdapter,
    ProviderIdentity.GOOGLE: GoogleAdapter,
    ProviderIdentity.PERPLEXITY: OpenAICompatibleAdapter,
    ProviderIdentity.GROQ: OpenAICompatibleAdapter,
    ProviderIdentity.MISTRAL: OpenAICompatibleAdapter,
}


class ProviderRouter:
    def __init__(self, providers: ProviderTable, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._adapters: dict[ProviderIdentity, ProviderAdapter] = {}
        self.logger = get_logger("multiai.providers")
        for identity, settings in providers.items():
            self.register(ADAPTER_TYPES[identity](settings, transport=transport))

    def register(self, adapter: ProviderAdapter) -> None:
        self._adapters[adapter.name] = adapter

    def configured(self) -> list[str]:
        return [
            identity.value
            for identity in ProviderIdentity
            if identity in self._adapters and self._adapters[identity].settings.configured
        ]

    def adapter_for(self, service: str) -> ProviderAdapter:
        identity = ProviderIdentity.parse(service)
        if identity is None or identity not in self._adapters:
            raise UnsupportedProviderError(service)
        return self._adapters[identity]

    async def dispatch(self, service: str, request: ChatRequest) -> dict[str, Any]:
        adapter = self.adapter_for(service)
        if not adapter.settings.configured:
            raise ConfigurationError(f"API key for {service} is not configured", service=service)

        ctx = TraceContext(service=service, model=adapter.resolve_model(request))
        started = perf_counter()
        try:
            response = await adapter.send(request)
        except Exception as exc:  # noqa: BLE001
            elapsed = round((perf_counter() - started) * 1000, 2)
            trace_event(
                self.logger,
                ctx,
                event="provider_call_failed",
                status="error",
                extra={"latency_ms": elapsed, **failure_diagnostics(exc)},
            )
            raise ProviderError(service, describe_failure(exc)) from exc

        elapsed = round((perf_counter() - started) * 1000, 2)
        trace_event(self.logger, ctx, event="provider_call", status="ok", extra={"latency_ms": elapsed})
        return response
