"""EchoPrompt - structured prompt generation with AI enhancement and local fallback."""

from .analytics import compute_generation_stats
from .compiler import PROMPT_FIELD_ORDER, compile_prompt
from .config import GeneratorConfig
from .metrics import complexity_score, extract_keywords, measure
from .models import AnalyticsEvent, GeneratedArtifact, PromptFields
from .recorder import AnalyticsRecorder
from .service import GenerationStatsService, PromptGenerationService, generate_prompt
from .validation import PromptValidationError, validate_prompt_fields

__all__ = [
    "PromptGenerationService",
    "GenerationStatsService",
    "AnalyticsRecorder",
    "GeneratorConfig",
    "PromptFields",
    "GeneratedArtifact",
    "AnalyticsEvent",
    "PromptValidationError",
    "PROMPT_FIELD_ORDER",
    "compile_prompt",
    "validate_prompt_fields",
    "measure",
    "extract_keywords",
    "complexity_score",
    "compute_generation_stats",
    "generate_prompt",
]

__version__ = "1.0.0"
