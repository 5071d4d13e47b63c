"""Uniform chat-completion relay over several hosted LLM providers."""

__version__ = "0.1.0"
