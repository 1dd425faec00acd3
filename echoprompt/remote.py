"""Wrapper turning a remote completion call into an explicit result."""

import asyncio
from dataclasses import dataclass
from typing import Union

from .compiler import PROMPT_FIELD_ORDER
from .models import PromptFields
from .ports import CompletionClient


REMOTE_LABELS = {
    "role": "ROLE",
    "task": "MAIN TASK",
    "context": "CONTEXT",
    "tone": "TONE",
    "output_format": "OUTPUT FORMAT",
    "constraints": "CONSTRAINTS",
    "response_length": "LENGTH",
    "audience": "AUDIENCE",
    "industry": "INDUSTRY",
    "mood": "MOOD",
    "language": "LANGUAGE",
    "complexity": "COMPLEXITY",
    "custom_variables": "CUSTOM VARIABLES",
}

_REQUEST_HEADER = """You are an expert prompt engineer. Create a {level} AI prompt based on the following specifications.

Your generated prompt should be:
- Clear, specific, and actionable
- Structured for optimal AI performance
- Include relevant context and constraints
- Use best practices from prompt engineering

USER SPECIFICATIONS:
"""

_OPTIMIZE_REQUEST = """
OPTIMIZATION REQUEST: Create an EXPERT-LEVEL prompt that:
1. Uses specific, unambiguous language
2. Organizes instructions logically with clear sections
3. Provides sufficient background for optimal performance
4. Includes relevant examples where beneficial
5. Clearly defines boundaries and expectations
6. Specifies exactly how the response should be formatted

Return ONLY the optimized prompt - no explanations, no metadata, just the final prompt that could be used directly with an AI model."""

_STANDARD_REQUEST = """
GENERATION REQUEST: Create a professional, well-structured prompt that incorporates all the above specifications.

Return ONLY the generated prompt - no explanations, no metadata, just the final prompt."""


@dataclass(frozen=True)
class RemoteSuccess:
    text: str


@dataclass(frozen=True)
class RemoteFailure:
    reason: str
    kind: str = "error"


RemoteResult = Union[RemoteSuccess, RemoteFailure]


def build_generation_request(fields: PromptFields, optimize: bool) -> str:
    """Build the instruction sent to the remote model for one set of fields."""
    prompt = _REQUEST_HEADER.format(level="EXPERT LEVEL" if optimize else "PROFESSIONAL")
    for name in PROMPT_FIELD_ORDER:
        value = fields.get(name)
        if value:
            prompt += f"{REMOTE_LABELS[name]}: {value}\n"
    prompt += _OPTIMIZE_REQUEST if optimize else _STANDARD_REQUEST
    return prompt


async def request_completion(client: CompletionClient, prompt_text: str) -> RemoteResult:
    """Make exactly one remote call and fold every failure mode into RemoteFailure."""
    try:
        text = await client.complete(prompt_text)
    except asyncio.CancelledError:
        raise
    except Exception as e:
        return RemoteFailure(reason=str(e) or e.__class__.__name__, kind=getattr(e, "kind", "error"))

    if not isinstance(text, str):
        return RemoteFailure(
            reason=f"Expected text from completion client, got {type(text).__name__}",
            kind="malformed_response",
        )
    if not text.strip():
        return RemoteFailure(reason="Completion client returned empty text", kind="empty_output")
    return RemoteSuccess(text=text)
