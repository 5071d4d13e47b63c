from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any


def new_request_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass(slots=True)
class TraceContext:
    service: str
    model: str | None = None
    request_id: str = field(default_factory=new_request_id)


def trace_event(logger, ctx: TraceContext, event: str, status: str, extra: dict[str, Any] | None = None) -> None:
    payload = {
        "request_id": ctx.request_id,
        "service": ctx.service,
        "model": ctx.model,
        "status": status,
    }
    if extra:
        payload.update(extra)
    if status == "error":
        logger.error(event, **payload)
    else:
        logger.info(event, **payload)
