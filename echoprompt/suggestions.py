"""AI-assisted field suggestions with static fallbacks."""

import json
import logging
import re
from typing import Dict, List, Optional

from .ports import CompletionClient
from .remote import RemoteSuccess, request_completion

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 8
MAX_COMPLETIONS = 5

AUTO_POPULATE_FIELDS = ("role", "tone", "outputFormat", "context", "audience", "industry")

FALLBACK_SUGGESTIONS: Dict[str, List[str]] = {
    "role": [
        "Software Engineer", "Full Stack Developer", "Data Scientist", "Product Manager",
        "UX/UI Designer", "DevOps Engineer", "Technical Writer", "Marketing Specialist",
        "Content Creator", "Business Analyst", "Project Manager", "Cybersecurity Expert",
    ],
    "task": [
        "Write comprehensive documentation for",
        "Create a detailed guide on how to",
        "Develop a strategy for implementing",
        "Analyze and provide insights on",
        "Design a user-friendly solution for",
        "Build a scalable system that can",
    ],
    "context": [
        "Enterprise software development",
        "Startup environment with limited resources",
        "Educational content for beginners",
        "Production system with high availability",
        "Mobile-first application design",
        "Cloud-native architecture",
    ],
    "tone": [
        "Professional and authoritative",
        "Friendly and conversational",
        "Technical and precise",
        "Creative and engaging",
        "Casual and approachable",
        "Formal and structured",
    ],
    "outputformat": [
        "Markdown with code examples",
        "JSON structured data",
        "Step-by-step bullet points",
        "Professional documentation",
        "Interactive tutorial format",
        "Executive summary format",
    ],
}

FALLBACK_COMPLETIONS: Dict[str, Dict[str, List[str]]] = {
    "role": {
        "full": ["Full Stack Developer", "Full Stack Engineer", "Full Stack Architect"],
        "senior": ["Senior Software Engineer", "Senior Developer", "Senior Data Scientist"],
        "lead": ["Lead Developer", "Lead Engineer", "Lead Designer"],
        "data": ["Data Scientist", "Data Engineer", "Data Analyst"],
        "product": ["Product Manager", "Product Owner", "Product Designer"],
        "tech": ["Technical Writer", "Technical Lead", "Technical Architect"],
        "ux": ["UX Designer", "UX Researcher", "UX Writer"],
        "dev": ["DevOps Engineer", "Developer", "Development Manager"],
    }
}

# (keywords, suggested values); the first matching row wins within each table
_ROLE_RULES = [
    (("write", "document", "guide"),
     {"role": "Technical Writer", "tone": "Professional", "outputFormat": "Markdown"}),
    (("code", "develop", "program"),
     {"role": "Software Engineer", "tone": "Technical", "outputFormat": "Code"}),
    (("analyze", "data", "research"),
     {"role": "Data Scientist", "tone": "Professional", "outputFormat": "Report"}),
    (("design", "ui", "ux"),
     {"role": "UX Designer", "tone": "Creative", "outputFormat": "Structured Design Brief"}),
    (("market", "campaign", "promote"),
     {"role": "Marketing Specialist", "tone": "Engaging", "outputFormat": "Marketing Plan"}),
]

_INDUSTRY_RULES = [
    (("ai", "machine learning", "ml"), {"industry": "Technology", "audience": "Developers"}),
    (("business", "company", "enterprise"),
     {"industry": "Business", "audience": "Business stakeholders"}),
    (("education", "learn", "teach"), {"industry": "Education", "audience": "Students"}),
]

_LIST_MARKER = re.compile(r"^[\d\-\*•]")
_CODE_FENCE = re.compile(r"```(?:json)?")


class FieldAssistant:
    """
    Suggestions for individual prompt fields.

    Every operation makes one remote attempt and answers from the static tables
    when it fails, so callers never see provider errors.
    """

    def __init__(self, client: Optional[CompletionClient] = None):
        self.client = client

    async def suggest(self, field: str, partial_text: str = "") -> List[str]:
        prompt = (
            f'Suggest {MAX_SUGGESTIONS} professional options for the "{field}" field in an AI '
            f'prompt generator.\nCurrent partial text: "{partial_text}"\n\n'
            "Provide suggestions that are relevant to AI, technology, and professional contexts "
            "and complete or extend the partial text naturally.\n\n"
            "Return only the suggestions, one per line, without numbering."
        )
        text = await self._ask(prompt, "suggestions")
        if text is None:
            return fallback_suggestions(field)

        lines = [line.strip() for line in text.split("\n")]
        return [line for line in lines if line and not _LIST_MARKER.match(line)][:MAX_SUGGESTIONS]

    async def complete(self, field: str, partial_text: str) -> List[str]:
        prompt = (
            f'Complete this {field} field based on the partial text "{partial_text}".\n'
            f"Provide {MAX_COMPLETIONS} relevant completions, one per line, without numbering "
            "or bullets.\n\n"
            f"Field: {field}\nPartial text: {partial_text}\n\nCompletions:"
        )
        text = await self._ask(prompt, "completion")
        if text is None:
            return fallback_completions(field, partial_text)

        prefix = partial_text.lower()
        lines = [line.strip() for line in text.split("\n")]
        return [line for line in lines if line and line.lower().startswith(prefix)][
            :MAX_COMPLETIONS
        ]

    async def auto_populate(self, task: str) -> Dict[str, str]:
        keys = ", ".join(f'"{key}"' for key in AUTO_POPULATE_FIELDS)
        prompt = (
            f'Based on this task: "{task}"\n\n'
            "Suggest appropriate values for prompt engineering fields. Only suggest fields "
            "that are clearly relevant; use null for the rest.\n\n"
            f"Respond with a single JSON object with the keys {keys}."
        )
        text = await self._ask(prompt, "auto-populate")
        if text is None:
            return fallback_auto_populate(task)

        try:
            suggestions = json.loads(_CODE_FENCE.sub("", text).strip())
        except json.JSONDecodeError as e:
            logger.warning("Failed to parse auto-populate JSON: %s", e)
            return fallback_auto_populate(task)
        if not isinstance(suggestions, dict):
            return fallback_auto_populate(task)

        result = {}
        for key, value in suggestions.items():
            if isinstance(value, str) and value.strip() and value.strip() != "null":
                result[key] = value.strip()
        return result

    async def _ask(self, prompt: str, purpose: str) -> Optional[str]:
        if self.client is None:
            return None
        outcome = await request_completion(self.client, prompt)
        if isinstance(outcome, RemoteSuccess):
            return outcome.text
        logger.warning("AI %s failed (%s): %s", purpose, outcome.kind, outcome.reason)
        return None


def fallback_suggestions(field: str) -> List[str]:
    return list(FALLBACK_SUGGESTIONS.get(field.lower(), []))


def fallback_completions(field: str, partial_text: str) -> List[str]:
    table = FALLBACK_COMPLETIONS.get(field.lower())
    if not table:
        return []
    partial = partial_text.lower()
    for key, values in table.items():
        if key.startswith(partial):
            return list(values)
    return []


def fallback_auto_populate(task: str) -> Dict[str, str]:
    lowered = task.lower()
    suggestions: Dict[str, str] = {}
    for rules in (_ROLE_RULES, _INDUSTRY_RULES):
        for keywords, values in rules:
            if any(keyword in lowered for keyword in keywords):
                suggestions.update(values)
                break
    return suggestions
