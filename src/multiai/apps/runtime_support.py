from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

import httpx

from multiai.core.config.loader import ProviderTable, load_app_config, resolve_provider_settings
from multiai.core.config.schema import AppConfig
from multiai.core.providers.router import ProviderRouter
from multiai.core.relay.service import ChatRelayService
from multiai.core.telemetry.logging import configure_logging


@dataclass(slots=True)
class RelayRuntime:
    cfg: AppConfig
    providers: ProviderTable
    router: ProviderRouter
    relay_service: ChatRelayService


def build_relay_runtime(
    config_path: str | None = None,
    *,
    cfg: AppConfig | None = None,
    environ: Mapping[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> RelayRuntime:
    cfg = cfg or load_app_config(instance_path=config_path, environ=environ)
    configure_logging(cfg.telemetry.log_level, json_logs=cfg.telemetry.json_logs)
    providers = resolve_provider_settings(cfg, environ)
    router = ProviderRouter(providers, transport=transport)
    return RelayRuntime(cfg=cfg, providers=providers, router=router, relay_service=ChatRelayService(router))
