from __future__ import annotations

from typing import Any

from multiai.core.providers.base import OutboundRequest, ProviderAdapter, drop_unset
from multiai.core.relay.schemas import ChatRequest


class OpenAICompatibleAdapter(ProviderAdapter):
    """openai, perplexity, groq and mistral all speak the chat/completions dialect."""

    def translate_request(self, request: ChatRequest) -> OutboundRequest:
        model = self.resolve_model(request)
        payload = drop_unset(
            {
                "messages": [m.model_dump() for m in request.messages],
                "model": model,
                "temperature": request.temperature,
                "max_tokens": request.max_tokens,
            }
        )
        payload["stream"] = False
        return OutboundRequest(
            url=self.settings.endpoint,
            model=model,
            json=payload,
            headers={"Authorization": f"Bearer {self.settings.api_key or ''}"},
        )

    def translate_response(self, body: dict[str, Any], outbound: OutboundRequest) -> dict[str, Any]:
        # Native shape is already canonical; only guard the one-choice invariant.
        if not body.get("choices"):
            raise ValueError(f"{self.name.value} returned no choices")
        return body
