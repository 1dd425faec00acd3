"""Adapters for integrating EchoPrompt with providers, storage and frameworks."""

from .gemini import GeminiClient, RemoteGenerationError
from .memory import InMemoryAnalyticsSink, InMemoryPromptStore
from .sqlalchemy_repo import SQLAlchemyPromptRepository, create_schema

__all__ = [
    "GeminiClient",
    "RemoteGenerationError",
    "InMemoryAnalyticsSink",
    "InMemoryPromptStore",
    "SQLAlchemyPromptRepository",
    "create_schema",
]
