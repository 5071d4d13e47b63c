from __future__ import annotations

from enum import Enum


class ProviderIdentity(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    PERPLEXITY = "perplexity"
    GROQ = "groq"
    MISTRAL = "mistral"

    @classmethod
    def parse(cls, value: str) -> ProviderIdentity | None:
        try:
            return cls(value)
        except ValueError:
            return None


OPENAI_COMPATIBLE = frozenset(
    {ProviderIdentity.OPENAI, ProviderIdentity.PERPLEXITY, ProviderIdentity.GROQ, ProviderIdentity.MISTRAL}
)
