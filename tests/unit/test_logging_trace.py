from __future__ import annotations

from multiai.core.telemetry.logging import configure_logging, get_logger
from multiai.core.telemetry.tracing import TraceContext, trace_event


def test_trace_event_emits_structured_fields(capsys):
    configure_logging()
    logger = get_logger("test.logger")
    ctx = TraceContext(service="openai", model="gpt-4o-mini", request_id="req1")

    trace_event(logger, ctx, event="provider_call", status="ok", extra={"latency_ms": 1.5})
    out = capsys.readouterr().out
    assert '"event": "provider_call"' in out
    assert '"request_id": "req1"' in out
    assert '"service": "openai"' in out
    assert '"status": "ok"' in out
    assert '"latency_ms": 1.5' in out


def test_trace_context_generates_request_id():
    a = TraceContext(service="groq")
    b = TraceContext(service="groq")
    assert a.request_id and b.request_id
    assert a.request_id != b.request_id
