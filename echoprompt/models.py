"""Core domain models used by the generation pipeline."""

from dataclasses import dataclass, field, fields as dataclass_fields
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

EVENT_AI_SUCCESS = "ai_generation_success"
EVENT_AI_FALLBACK = "ai_generation_fallback"

PROVIDER_GEMINI = "gemini"
PROVIDER_FALLBACK = "fallback"

_CAMEL_CASE_KEYS = {
    "output_format": "outputFormat",
    "response_length": "responseLength",
    "custom_variables": "customVariables",
}


@dataclass(frozen=True)
class PromptFields:
    """Structured input for one generation request."""

    role: Optional[str] = None
    task: Optional[str] = None
    context: Optional[str] = None
    tone: Optional[str] = None
    output_format: Optional[str] = None
    constraints: Optional[str] = None
    response_length: Optional[str] = None
    audience: Optional[str] = None
    industry: Optional[str] = None
    mood: Optional[str] = None
    language: Optional[str] = None
    complexity: Optional[str] = None
    custom_variables: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "PromptFields":
        """Build fields from a request payload, accepting camelCase or snake_case keys."""
        if not data:
            return cls()

        values: Dict[str, Optional[str]] = {}
        for attr in _field_names():
            raw = data.get(attr)
            if raw is None and attr in _CAMEL_CASE_KEYS:
                raw = data.get(_CAMEL_CASE_KEYS[attr])
            if not isinstance(raw, str):
                continue
            trimmed = raw.strip()
            values[attr] = trimmed or None
        return cls(**values)

    def get(self, name: str) -> Optional[str]:
        return getattr(self, name)

    def to_dict(self) -> Dict[str, str]:
        """Return the present fields keyed the way the HTTP API spells them."""
        result = {}
        for attr in _field_names():
            value = getattr(self, attr)
            if value:
                result[_CAMEL_CASE_KEYS.get(attr, attr)] = value
        return result


def _field_names() -> List[str]:
    return [f.name for f in dataclass_fields(PromptFields)]


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: List[str]


@dataclass(frozen=True)
class ContentMetrics:
    word_count: int
    character_count: int


@dataclass(frozen=True)
class PromptMetadata:
    optimized: bool
    ai_enhanced: bool
    generation_time_ms: float
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: str = "1.0.0"


@dataclass(frozen=True)
class InteractionCounters:
    """Interaction counters; mutated later by the copy/view/export endpoints."""

    views: int = 0
    copies: int = 0
    exports: int = 0


@dataclass(frozen=True)
class GeneratedArtifact:
    """A generated prompt together with its derived metrics."""

    content: str
    fields: PromptFields
    metadata: PromptMetadata
    word_count: int
    character_count: int
    keywords: List[str]
    complexity_score: int
    analytics: InteractionCounters = field(default_factory=InteractionCounters)
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "promptData": self.fields.to_dict(),
            "metadata": {
                "version": self.metadata.version,
                "generatedAt": self.metadata.generated_at.isoformat(),
                "optimized": self.metadata.optimized,
                "aiEnhanced": self.metadata.ai_enhanced,
                "generationTime": self.metadata.generation_time_ms,
            },
            "analytics": {
                "views": self.analytics.views,
                "copies": self.analytics.copies,
                "exports": self.analytics.exports,
            },
            "wordCount": self.word_count,
            "characterCount": self.character_count,
            "keywords": list(self.keywords),
        }


@dataclass(frozen=True)
class AnalyticsEvent:
    """Outcome of a single generation attempt."""

    event_type: str
    ai_provider: str
    generation_time_ms: Optional[float]
    word_count: Optional[int]
    character_count: Optional[int]
    optimized: Optional[bool]
    created_at: datetime
    prompt_id: Optional[str] = None
    output_format: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    error_message: Optional[str] = None


@dataclass(frozen=True)
class RequestMeta:
    """Optional information about the caller, copied onto analytics events."""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
