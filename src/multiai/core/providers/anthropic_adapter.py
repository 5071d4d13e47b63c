from __future__ import annotations

from typing import Any

from multiai.core.providers.base import OutboundRequest, ProviderAdapter, drop_unset, single_choice_response
from multiai.core.relay.schemas import ChatRequest

ANTHROPIC_VERSION = "2023-06-01"
DEFAULT_MAX_TOKENS = 1024


class AnthropicAdapter(ProviderAdapter):
    def translate_request(self, request: ChatRequest) -> OutboundRequest:
        model = self.resolve_model(request)
        system = next((m.content for m in request.messages if m.role == "system"), None)
        messages = [
            {"role": "assistant" if m.role == "assistant" else "user", "content": m.content}
            for m in request.messages
            if m.role != "system"
        ]
        payload = drop_unset(
            {
                "messages": messages,
                "model": model,
                "max_tokens": request.max_tokens or DEFAULT_MAX_TOKENS,
                "temperature": request.temperature,
                "system": system,
            }
        )
        return OutboundRequest(
            url=self.settings.endpoint,
            model=model,
            json=payload,
            headers={"x-api-key": self.settings.api_key or "", "anthropic-version": ANTHROPIC_VERSION},
        )

    def translate_response(self, body: dict[str, Any], outbound: OutboundRequest) -> dict[str, Any]:
        return single_choice_response(
            response_id=body["id"],
            model=body.get("model") or outbound.model,
            content=body["content"][0]["text"],
            finish_reason=body.get("stop_reason"),
            usage=body.get("usage"),
        )
