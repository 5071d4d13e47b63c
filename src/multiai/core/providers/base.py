from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

import httpx

from multiai.core.config.loader import ProviderSettings
from multiai.core.providers.identity import ProviderIdentity
from multiai.core.relay.schemas import ChatChoice, ChatMessage, ChatRequest, ChatResponse


@dataclass(slots=True)
class OutboundRequest:
    url: str
    model: str
    json: dict[str, Any]
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)


def drop_unset(payload: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in payload.items() if v is not None}


def single_choice_response(
    *,
    response_id: str,
    model: str,
    content: str,
    finish_reason: str | None,
    usage: dict[str, Any] | None,
) -> dict[str, Any]:
    response = ChatResponse(
        id=response_id,
        created=int(time.time()),
        model=model,
        choices=[
            ChatChoice(
                index=0,
                message=ChatMessage(role="assistant", content=content),
                finish_reason=finish_reason or "stop",
            )
        ],
        usage=usage,
    )
    return response.model_dump(exclude_none=True)


class ProviderAdapter(ABC):
    """Translates canonical chat requests to one provider's wire format and back."""

    name: ProviderIdentity

    def __init__(self, settings: ProviderSettings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = settings
        self.name = settings.identity
        self.transport = transport

    def resolve_model(self, request: ChatRequest) -> str:
        return request.model or self.settings.default_model

    @abstractmethod
    def translate_request(self, request: ChatRequest) -> OutboundRequest:
        raise NotImplementedError

    @abstractmethod
    def translate_response(self, body: dict[str, Any], outbound: OutboundRequest) -> dict[str, Any]:
        raise NotImplementedError

    def _client(self) -> httpx.AsyncClient:
        # None means no timeout; omitting it would leave httpx's 5s default
        kwargs: dict[str, Any] = {"timeout": self.settings.timeout_seconds}
        if self.transport is not None:
            kwargs["transport"] = self.transport
        return httpx.AsyncClient(**kwargs)

    async def send(self, request: ChatRequest) -> dict[str, Any]:
        outbound = self.translate_request(request)
        async with self._client() as client:
            resp = await client.post(
                outbound.url,
                json=outbound.json,
                headers={**outbound.headers, "Content-Type": "application/json"},
                params=outbound.params or None,
            )
            resp.raise_for_status()
            body = resp.json()
        return self.translate_response(body, outbound)
