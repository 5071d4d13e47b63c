from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from multiai.core.config.schema import AppConfig
from multiai.core.providers.identity import ProviderIdentity


@dataclass(slots=True, frozen=True)
class ProviderSettings:
    identity: ProviderIdentity
    endpoint: str
    api_key: str | None
    default_model: str
    timeout_seconds: float | None = None

    @property
    def configured(self) -> bool:
        return bool(self.api_key)


ProviderTable = Mapping[ProviderIdentity, ProviderSettings]


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    content = yaml.safe_load(path.read_text(encoding="utf-8"))
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return content


def _split_origins(raw: str) -> list[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def load_app_config(
    defaults_path: str | Path = "config/defaults.yaml",
    instance_path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    if environ is None:
        load_dotenv()
        environ = os.environ

    merged = AppConfig().model_dump(mode="json")
    merged = _deep_merge(merged, _load_yaml(Path(defaults_path)))

    explicit_instance = instance_path or environ.get("MULTIAI_CONFIG_FILE")
    if explicit_instance:
        merged = _deep_merge(merged, _load_yaml(Path(explicit_instance)))

    env_port = environ.get("PORT")
    if env_port:
        merged["server"]["port"] = env_port

    env_origins = environ.get("ALLOWED_ORIGINS")
    if env_origins:
        merged["server"]["allowed_origins"] = _split_origins(env_origins)

    env_environment = environ.get("MULTIAI_ENVIRONMENT")
    if env_environment:
        merged["environment"] = env_environment

    env_log_level = environ.get("MULTIAI_LOG_LEVEL")
    if env_log_level:
        merged["telemetry"]["log_level"] = env_log_level

    try:
        return AppConfig.model_validate(merged)
    except ValidationError as exc:
        raise ValueError(f"Invalid multiai configuration: {exc}") from exc


def resolve_provider_settings(cfg: AppConfig, environ: Mapping[str, str] | None = None) -> ProviderTable:
    """Snapshot keys and default models for every provider; the result is read-only."""
    env = os.environ if environ is None else environ
    table: dict[ProviderIdentity, ProviderSettings] = {}
    for identity in ProviderIdentity:
        pcfg = cfg.providers.for_identity(identity)
        api_key = (env.get(pcfg.api_key_env) or "").strip() or None
        model_override = (env.get(pcfg.model_env) or "").strip()
        table[identity] = ProviderSettings(
            identity=identity,
            endpoint=pcfg.endpoint.rstrip("/"),
            api_key=api_key,
            default_model=model_override or pcfg.default_model,
            timeout_seconds=pcfg.timeout_seconds,
        )
    return MappingProxyType(table)
