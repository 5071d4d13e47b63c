from __future__ import annotations

from pydantic import BaseModel, Field

from multiai.core.providers.identity import ProviderIdentity


class InstanceConfig(BaseModel):
    name: str = "multiai"


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 48395
    allowed_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])


class TelemetryConfig(BaseModel):
    log_level: str = "INFO"
    json_logs: bool = True


class ProviderConfig(BaseModel):
    endpoint: str
    api_key_env: str
    model_env: str
    default_model: str
    timeout_seconds: float | None = None


def _provider(endpoint: str, env_prefix: str, default_model: str):
    return lambda: ProviderConfig(
        endpoint=endpoint,
        api_key_env=f"{env_prefix}_API_KEY",
        model_env=f"{env_prefix}_MODEL",
        default_model=default_model,
    )


class ProvidersConfig(BaseModel):
    openai: ProviderConfig = Field(
        default_factory=_provider("https://api.openai.com/v1/chat/completions", "OPENAI", "gpt-4o-mini")
    )
    anthropic: ProviderConfig = Field(
        default_factory=_provider("https://api.anthropic.com/v1/messages", "ANTHROPIC", "claude-3-5-sonnet-20241022")
    )
    google: ProviderConfig = Field(
        default_factory=_provider(
            "https://generativelanguage.googleapis.com/v1beta/models", "GOOGLE", "gemini-2.5-flash-lite"
        )
    )
    perplexity: ProviderConfig = Field(
        default_factory=_provider("https://api.perplexity.ai/chat/completions", "PERPLEXITY", "sonar")
    )
    groq: ProviderConfig = Field(
        default_factory=_provider(
            "https://api.groq.com/openai/v1/chat/completions", "GROQ", "llama-3.3-70b-versatile"
        )
    )
    mistral: ProviderConfig = Field(
        default_factory=_provider("https://api.mistral.ai/v1/chat/completions", "MISTRAL", "mistral-small-latest")
    )

    def for_identity(self, identity: ProviderIdentity) -> ProviderConfig:
        return getattr(self, identity.value)


class AppConfig(BaseModel):
    instance: InstanceConfig = Field(default_factory=InstanceConfig)
    environment: str = "dev"
    server: ServerConfig = Field(default_factory=ServerConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)
    providers: ProvidersConfig = Field(default_factory=ProvidersConfig)
