from __future__ import annotations

import time
from typing import Any

from multiai.core.providers.base import OutboundRequest, ProviderAdapter, drop_unset, single_choice_response
from multiai.core.relay.schemas import ChatRequest


class GoogleAdapter(ProviderAdapter):
    """Gemini generateContent: model lives in the path and the key in the query string."""

    def translate_request(self, request: ChatRequest) -> OutboundRequest:
        model = self.resolve_model(request)
        contents = [
            {"role": "model" if m.role == "assistant" else "user", "parts": [{"text": m.content}]}
            for m in request.messages
        ]
        payload = {
            "contents": contents,
            "generationConfig": drop_unset(
                {"temperature": request.temperature, "maxOutputTokens": request.max_tokens}
            ),
        }
        return OutboundRequest(
            url=f"{self.settings.endpoint}/{model}:generateContent",
            model=model,
            json=payload,
            params={"key": self.settings.api_key or ""},
        )

    def translate_response(self, body: dict[str, Any], outbound: OutboundRequest) -> dict[str, Any]:
        candidate = body["candidates"][0]
        return single_choice_response(
            response_id=f"google-{int(time.time() * 1000)}",
            model=outbound.model,
            content=candidate["content"]["parts"][0]["text"],
            finish_reason=candidate.get("finishReason"),
            usage=body.get("usageMetadata"),
        )
