from __future__ import annotations

import argparse
from datetime import datetime, timezone
from typing import Any

import uvicorn
from fastapi import APIRouter, Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from multiai import __version__
from multiai.apps.runtime_support import RelayRuntime, build_relay_runtime
from multiai.core.relay.schemas import HealthResponse, ServicesResponse
from multiai.core.runtime.errors import RelayError
from multiai.core.telemetry.logging import get_logger


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def create_app(config_path: str | None = None, runtime: RelayRuntime | None = None) -> FastAPI:
    runtime = runtime or build_relay_runtime(config_path=config_path)
    relay = runtime.relay_service
    logger = get_logger("multiai.api")

    app = FastAPI(title="MultiAI Relay API", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=runtime.cfg.server.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RelayError)
    async def _relay_error(request: Request, exc: RelayError) -> JSONResponse:
        if exc.http_status >= 500:
            logger.error("chat_error", path=request.url.path, service=exc.service, error=exc.message)
        return JSONResponse(status_code=exc.http_status, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def _invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code in {404, 405}:
            return JSONResponse(status_code=404, content={"error": "Not found"})
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled_error", path=request.url.path, error_type=exc.__class__.__name__, error=str(exc))
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(status="ok", timestamp=_utc_timestamp())

    api = APIRouter(prefix="/api/ai")

    @api.get("/services", response_model=ServicesResponse)
    def services() -> ServicesResponse:
        return ServicesResponse(services=relay.list_services())

    @api.post("/chat/{service}")
    async def chat_for_service(service: str, payload: Any = Body(default=None)) -> dict:
        return await relay.chat(service, payload)

    @api.post("/chat")
    async def chat(payload: Any = Body(default=None)) -> dict:
        service, body = relay.split_service(payload)
        return await relay.chat(service, body)

    app.include_router(api)
    return app


# import target for `uvicorn multiai.apps.api_server:app`
app = create_app()


def main() -> int:
    parser = argparse.ArgumentParser(prog="multiai-api", description="MultiAI chat relay API")
    parser.add_argument("--config", default=None, help="Config file path")
    parser.add_argument("--host", default=None)
    parser.add_argument("--port", type=int, default=None)
    args = parser.parse_args()

    runtime = build_relay_runtime(config_path=args.config)
    api = create_app(runtime=runtime)
    host = args.host or runtime.cfg.server.host
    port = args.port or runtime.cfg.server.port
    get_logger("multiai.api").info("server_starting", host=host, port=port, services=runtime.relay_service.list_services())
    uvicorn.run(api, host=host, port=port, log_level="info")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
