from __future__ import annotations

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from multiai.core.providers.router import ProviderRouter
from multiai.core.relay.schemas import ChatRequest
from multiai.core.runtime.errors import ValidationError


def _describe_validation(exc: PydanticValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"Invalid chat request: {location}: {first.get('msg', 'invalid value')}"


class ChatRelayService:
    """HTTP-independent facade: provider listing and validated chat dispatch."""

    def __init__(self, router: ProviderRouter) -> None:
        self.router = router

    def list_services(self) -> list[str]:
        return self.router.configured()

    def parse_request(self, body: Any) -> ChatRequest:
        if not isinstance(body, dict):
            raise ValidationError("Messages array is required")
        messages = body.get("messages")
        if not isinstance(messages, list) or not messages:
            raise ValidationError("Messages array is required")
        try:
            return ChatRequest.model_validate(body)
        except PydanticValidationError as exc:
            raise ValidationError(_describe_validation(exc)) from exc

    def split_service(self, body: Any) -> tuple[str, dict[str, Any]]:
        if not isinstance(body, dict) or not body.get("service"):
            raise ValidationError("Service parameter is required")
        rest = dict(body)
        service = rest.pop("service")
        if not isinstance(service, str):
            raise ValidationError("Service parameter is required")
        return service, rest

    async def chat(self, service: str, body: ChatRequest | dict[str, Any]) -> dict[str, Any]:
        request = body if isinstance(body, ChatRequest) else self.parse_request(body)
        return await self.router.dispatch(service, request)
