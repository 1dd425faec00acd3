"""Derived metrics for generated content and prompt fields."""

from typing import List

from .models import ContentMetrics, PromptFields

MAX_KEYWORDS = 20
TASK_KEYWORD_WORDS = 50

STOP_WORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by",
        "is", "are", "was", "were", "be", "been", "being", "have", "has", "had", "do", "does",
        "did", "will", "would", "could", "should", "may", "might", "can", "must", "shall",
    }
)


def measure(content: str) -> ContentMetrics:
    return ContentMetrics(word_count=len(content.split()), character_count=len(content))


def extract_keywords(fields: PromptFields) -> List[str]:
    """Return up to 20 distinct keywords in first-occurrence order."""
    candidates: List[str] = []

    if fields.role:
        candidates.extend(fields.role.lower().split())
    if fields.task:
        candidates.extend(fields.task.lower().split()[:TASK_KEYWORD_WORDS])

    # category values are kept whole, even when they contain spaces
    for value in (fields.industry, fields.tone, fields.output_format):
        if value:
            candidates.append(value.lower())

    keywords: List[str] = []
    seen = set()
    for word in candidates:
        if word in seen:
            continue
        seen.add(word)
        if len(word) > 2 and word not in STOP_WORDS:
            keywords.append(word)
    return keywords[:MAX_KEYWORDS]


def complexity_score(fields: PromptFields) -> int:
    """Additive heuristic normalized to an integer in [0, 10]."""
    score = 0.0
    if fields.task:
        score += 1
    if fields.role:
        score += 0.5
    if fields.context:
        score += 1
    if fields.constraints:
        score += 1
    if fields.custom_variables:
        score += 1.5

    total_length = (
        len(fields.task or "") + len(fields.context or "") + len(fields.constraints or "")
    )
    if total_length > 500:
        score += 1
    if total_length > 1000:
        score += 1

    return min(int(round(score * 2)), 10)
